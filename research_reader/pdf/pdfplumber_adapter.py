import io
from collections.abc import Iterator

import pdfplumber

from research_reader.pdf.base import BasePdfExtractor
from research_reader.pdf.models import PageEvent, PdfEvent, TextEvent


class PdfPlumberAdapter(BasePdfExtractor):
    """Streams words from PDF pages using pdfplumber."""

    def iter_events(self, pdf_bytes: bytes) -> Iterator[PdfEvent]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for number, page in enumerate(pdf.pages, start=1):
                yield PageEvent(page_number=number)
                for word in page.extract_words():
                    yield TextEvent(text=word["text"])
