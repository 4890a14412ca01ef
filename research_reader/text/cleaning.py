import re

_DISALLOWED = re.compile(r"[^\w\s.,!?\-()\[\]:\"']")
_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_TERMINATOR = re.compile(r"\s+([.!?])")
_AFTER_TERMINATOR = re.compile(r"([.!?])\s*")


def clean_text(text: str) -> str:
    """Strip noise characters and normalize spacing for narration.

    Characters outside the allow-list become spaces, whitespace runs (newlines
    included) collapse to one space, sentence punctuation is glued to the
    preceding word and followed by exactly one space. Applying it twice gives
    the same result as applying it once.
    """
    cleaned = _DISALLOWED.sub(" ", text)
    cleaned = _WHITESPACE.sub(" ", cleaned)
    cleaned = _SPACE_BEFORE_TERMINATOR.sub(r"\1", cleaned)
    cleaned = _AFTER_TERMINATOR.sub(r"\1 ", cleaned)
    return cleaned.strip()
