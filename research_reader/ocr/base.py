from abc import ABC, abstractmethod


def should_use_ocr(text: str, min_text_length: int = 50) -> bool:
    """Text-layer output shorter than the floor is treated as image-only."""
    return len(text.strip()) < min_text_length


class BaseOcrEngine(ABC):
    """Contract for OCR fallback adapters."""

    @abstractmethod
    def recognize(self, pdf_bytes: bytes, name: str) -> str:
        """Best-effort text from the rendered first pages of a PDF.

        Args:
            pdf_bytes: Raw PDF file content.
            name: Logical name of the upload, used for temp files and logs.

        Returns:
            Recognized text, or an empty string when no page produced any.

        Raises:
            OcrError: if the rendering pipeline itself cannot run.
        """
