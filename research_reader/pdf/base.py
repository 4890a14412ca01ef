from abc import ABC, abstractmethod
from collections.abc import Iterator

from research_reader.logging.logger import Log
from research_reader.pdf.exceptions import FormatError, ParseError
from research_reader.pdf.models import PageEvent, PdfEvent, TextEvent, TextLayerResult

PDF_MAGIC = b"%PDF"


class BasePdfExtractor(ABC):
    """Contract for all PDF text-layer adapters.

    Adapters only translate their engine's output into a stream of page and
    text events. Page capping, token joining and error wrapping live here so
    every engine behaves the same.
    """

    def __init__(self, max_pages: int = 3) -> None:
        self._max_pages = max_pages

    @abstractmethod
    def iter_events(self, pdf_bytes: bytes) -> Iterator[PdfEvent]:
        """Yield page and text events in document order.

        Pages must be parsed lazily so that a consumer which stops early does
        not pay for the rest of the document.
        """

    def extract(self, pdf_bytes: bytes) -> TextLayerResult:
        """Extract text from the first pages of a PDF.

        Returns:
            TextLayerResult with trimmed text and the highest page number seen.

        Raises:
            FormatError: if the buffer does not start with the PDF marker.
            ParseError: if the engine fails on the document structure.
        """
        if not pdf_bytes.startswith(PDF_MAGIC):
            raise FormatError("Invalid PDF file - missing PDF header")

        tokens: list[str] = []
        page_count = 0
        current_page = 0
        events = self.iter_events(pdf_bytes)
        try:
            for event in events:
                if isinstance(event, PageEvent):
                    current_page = event.page_number
                    page_count = max(page_count, current_page)
                    if current_page > self._max_pages:
                        Log.info(f"Stopping extraction after {self._max_pages} pages")
                        break
                    Log.debug(f"Processing page {current_page}")
                elif isinstance(event, TextEvent) and event.text:
                    tokens.append(event.text)
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(f"PDF parsing failed: {exc}") from exc
        finally:
            close = getattr(events, "close", None)
            if close is not None:
                close()

        text = " ".join(tokens).strip()
        Log.info(f"PDF parsing completed: pages={page_count} text_length={len(text)}")
        return TextLayerResult(text=text, page_count=page_count)
