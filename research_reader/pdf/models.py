from dataclasses import dataclass


@dataclass(frozen=True)
class PageEvent:
    """Start of a page. Page numbers are 1-based."""

    page_number: int


@dataclass(frozen=True)
class TextEvent:
    """A text token on the current page, in reading order."""

    text: str


PdfEvent = PageEvent | TextEvent


@dataclass(frozen=True)
class TextLayerResult:
    """Text gathered from the embedded text layer."""

    text: str
    page_count: int
