from dataclasses import dataclass

from research_reader.logging.logger import Log

EXTRACTION_TERMINATORS = (".",)
SPEECH_TERMINATORS = (".", "?", "!")
SPEECH_MIN_CUT_RATIO = 0.7
ELLIPSIS = "..."


@dataclass(frozen=True)
class TruncationResult:
    """Outcome of a budget check, reported even when nothing was cut."""

    text: str
    was_truncated: bool
    original_length: int
    final_length: int


def truncate_text(
    text: str,
    budget: int,
    terminators: tuple[str, ...],
    *,
    min_cut_ratio: float = 0.0,
    ellipsis: str = "",
) -> TruncationResult:
    """Cut text to a character budget, preferring a sentence boundary.

    The text is hard-cut at ``budget`` and then backtracked to the last
    terminator inside the cut. The boundary is used only when it lies past
    ``budget * min_cut_ratio``; otherwise the hard cut is kept and
    ``ellipsis`` appended.
    """
    original_length = len(text)
    if original_length <= budget:
        return TruncationResult(text, False, original_length, original_length)

    hard_cut = text[:budget]
    cut_point = max(hard_cut.rfind(t) for t in terminators)
    if cut_point > 0 and cut_point > budget * min_cut_ratio:
        result = hard_cut[: cut_point + 1]
    else:
        result = hard_cut + ellipsis

    Log.info(f"Text truncated from {original_length} to {len(result)} characters")
    return TruncationResult(result, True, original_length, len(result))


def truncate_for_transcreation(text: str, budget: int = 2200) -> TruncationResult:
    """Bound extracted text before it is sent to the LLM."""
    return truncate_text(text, budget, EXTRACTION_TERMINATORS)


def truncate_for_speech(text: str, budget: int = 2000) -> TruncationResult:
    """Bound transcreated text before it is sent to text-to-speech."""
    return truncate_text(
        text,
        budget,
        SPEECH_TERMINATORS,
        min_cut_ratio=SPEECH_MIN_CUT_RATIO,
        ellipsis=ELLIPSIS,
    )
