from dataclasses import dataclass

from research_reader.text.truncation import TruncationResult


@dataclass(frozen=True)
class ExtractionResult:
    """What the upload screen receives after extraction."""

    text: str
    page_count: int
    extracted_page_count: int
    original_length: int
    extracted_length: int
    was_truncated: bool
    document_id: int | None
    cached: bool
    filename: str = ""
    used_ocr: bool = False


@dataclass(frozen=True)
class TranscreationResult:
    """Transcreated text; tokens_used is 0 for cache hits."""

    text: str
    transcreation_id: int | None
    tokens_used: int
    cached: bool


@dataclass(frozen=True)
class SpeechResult:
    """Narration as a base64 data URI; characters_used is 0 for cache hits."""

    audio_data: str
    audio_id: int | None
    voice_id: str | None
    characters_used: int
    cached: bool
    truncation: TruncationResult | None = None
