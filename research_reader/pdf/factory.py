from research_reader.config.settings import Settings
from research_reader.ocr.base import BaseOcrEngine
from research_reader.ocr.tesseract_adapter import TesseractOcrAdapter
from research_reader.pdf.base import BasePdfExtractor
from research_reader.pdf.pdfplumber_adapter import PdfPlumberAdapter
from research_reader.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Builds the text-layer extractor and the OCR engine named in settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }
    OCR_ENGINES: dict[str, type[TesseractOcrAdapter]] = {
        "tesseract": TesseractOcrAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(max_pages=settings.max_extract_pages)

    @classmethod
    def create_ocr_engine(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.lower()
        engine_cls = cls.OCR_ENGINES.get(engine)
        if engine_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.OCR_ENGINES)}"
            )
        return engine_cls(
            max_pages=settings.ocr_max_pages,
            language=settings.ocr_language,
            dpi=settings.ocr_dpi,
            timeout_seconds=settings.ocr_timeout_seconds,
        )
