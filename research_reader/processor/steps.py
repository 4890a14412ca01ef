from research_reader.database.repositories.document_repository import DocumentRepository
from research_reader.errors import InputValidationError, SizeError
from research_reader.logging.logger import Log
from research_reader.ocr.base import BaseOcrEngine, should_use_ocr
from research_reader.ocr.exceptions import OcrError
from research_reader.pdf.base import BasePdfExtractor
from research_reader.processor.pipeline import ExtractionContext, PipelineStep
from research_reader.text.cleaning import clean_text
from research_reader.text.truncation import truncate_for_transcreation

PDF_CONTENT_TYPE = "application/pdf"


class ValidateUploadStep(PipelineStep):
    def __init__(self, max_bytes: int, min_bytes: int) -> None:
        self._max_bytes = max_bytes
        self._min_bytes = min_bytes

    def run(self, context: ExtractionContext) -> ExtractionContext:
        if not context.filename:
            raise InputValidationError("No file provided")
        if context.content_type is not None and context.content_type != PDF_CONTENT_TYPE:
            raise InputValidationError("File must be a PDF")
        if context.file_size > self._max_bytes:
            raise SizeError(
                f"File size must be less than {self._max_bytes // (1024 * 1024)}MB"
            )
        if context.file_size < self._min_bytes:
            raise SizeError("File appears to be corrupted or empty")
        if not context.file_bytes:
            raise InputValidationError("File buffer is empty")
        return context


class CacheLookupStep(PipelineStep):
    """Short-circuits the pipeline when (filename, size) was seen before."""

    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: ExtractionContext) -> ExtractionContext:
        existing = self._doc_repo.find_by_filename_and_size(
            context.filename, context.file_size
        )
        if existing is None:
            return context
        Log.info(f"Found cached document {existing.id} for {context.filename}")
        context.text = existing.extracted_text
        context.page_count = existing.page_count
        context.extracted_page_count = existing.extracted_pages
        context.document_id = existing.id
        context.cached = True
        context.done = True
        return context


class ExtractTextLayerStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor, max_pages: int) -> None:
        self._pdf_extractor = pdf_extractor
        self._max_pages = max_pages

    def run(self, context: ExtractionContext) -> ExtractionContext:
        result = self._pdf_extractor.extract(context.file_bytes)
        context.text = result.text
        context.page_count = result.page_count
        context.extracted_page_count = min(result.page_count, self._max_pages)
        Log.info(f"Text layer extraction yielded {len(result.text)} chars")
        return context


class OcrFallbackStep(PipelineStep):
    def __init__(self, ocr_engine: BaseOcrEngine, min_text_length: int) -> None:
        self._ocr_engine = ocr_engine
        self._min_text_length = min_text_length

    def run(self, context: ExtractionContext) -> ExtractionContext:
        if not should_use_ocr(context.text, self._min_text_length):
            return context
        Log.warning(
            "Text layer extraction yielded very little text. Attempting OCR fallback"
        )
        text = self._ocr_engine.recognize(context.file_bytes, context.filename)
        if not text.strip():
            Log.error(f"OCR fallback found no text in {context.filename}")
            raise OcrError()
        context.text = text
        context.used_ocr = True
        Log.info(f"OCR extraction successful: {len(text)} chars")
        return context


class CleanTextStep(PipelineStep):
    def run(self, context: ExtractionContext) -> ExtractionContext:
        context.text = clean_text(context.text)
        return context


class TruncateStep(PipelineStep):
    def __init__(self, budget: int) -> None:
        self._budget = budget

    def run(self, context: ExtractionContext) -> ExtractionContext:
        context.truncation = truncate_for_transcreation(context.text, self._budget)
        context.text = context.truncation.text
        return context


class PersistDocumentStep(PipelineStep):
    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: ExtractionContext) -> ExtractionContext:
        record = self._doc_repo.insert(
            filename=context.filename,
            file_size=context.file_size,
            extracted_text=context.text,
            page_count=context.page_count,
            extracted_pages=context.extracted_page_count,
        )
        context.document_id = record.id
        Log.info(f"Document stored with ID {record.id}")
        return context
