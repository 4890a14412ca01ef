import re
import tempfile
from pathlib import Path

import pymupdf
import pytesseract

from research_reader.logging.logger import Log
from research_reader.ocr.base import BaseOcrEngine
from research_reader.ocr.exceptions import OcrError

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class TesseractOcrAdapter(BaseOcrEngine):
    """Renders pages with PyMuPDF and reads them with Tesseract.

    Pages are processed one at a time; a failing page is logged and skipped
    so partial text still comes back.
    """

    def __init__(
        self,
        *,
        max_pages: int = 3,
        language: str = "eng",
        dpi: int = 200,
        timeout_seconds: int = 60,
    ) -> None:
        self._max_pages = max_pages
        self._language = language
        self._dpi = dpi
        self._timeout_seconds = timeout_seconds

    def recognize(self, pdf_bytes: bytes, name: str) -> str:
        safe_name = _UNSAFE_NAME_CHARS.sub("_", name) or "upload.pdf"
        try:
            with tempfile.TemporaryDirectory(prefix="research-reader-ocr-") as tmp:
                work_dir = Path(tmp)
                pdf_path = work_dir / safe_name
                pdf_path.write_bytes(pdf_bytes)
                with pymupdf.open(str(pdf_path)) as doc:  # type: ignore[no-untyped-call]
                    last_page = min(self._max_pages, doc.page_count)
                    texts = [
                        self._recognize_page(doc, number, work_dir)
                        for number in range(1, last_page + 1)
                    ]
        except Exception as exc:
            Log.exception(f"OCR processing failed for {name}: {exc}")
            raise OcrError(f"Failed to extract text using OCR: {exc}") from exc

        return "\n\n".join(text for text in texts if text)

    def _recognize_page(self, doc: pymupdf.Document, number: int, work_dir: Path) -> str:
        image_path = work_dir / f"page-{number}.png"
        try:
            Log.info(f"Converting PDF page {number} to image for OCR")
            pixmap = doc.load_page(number - 1).get_pixmap(dpi=self._dpi)
            pixmap.save(str(image_path))
            Log.info(f"Running OCR on page {number}")
            text = pytesseract.image_to_string(
                str(image_path),
                lang=self._language,
                config="--oem 1 --psm 3",
                timeout=self._timeout_seconds,
            )
            return text.strip()
        except Exception as exc:
            Log.warning(f"OCR failed for page {number}: {exc}")
            return ""
        finally:
            image_path.unlink(missing_ok=True)
