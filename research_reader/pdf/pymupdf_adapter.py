from collections.abc import Iterator

import pymupdf

from research_reader.pdf.base import BasePdfExtractor
from research_reader.pdf.models import PageEvent, PdfEvent, TextEvent


class PyMuPdfAdapter(BasePdfExtractor):
    """Streams words from PDF pages using PyMuPDF."""

    def iter_events(self, pdf_bytes: bytes) -> Iterator[PdfEvent]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for number, page in enumerate(doc, start=1):
                yield PageEvent(page_number=number)
                # (x0, y0, x1, y1, word, block_no, line_no, word_no)
                for word in page.get_text("words", sort=True):
                    yield TextEvent(text=word[4])
