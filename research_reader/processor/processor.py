from types import TracebackType

from research_reader.config.settings import Settings
from research_reader.database.connection import Database
from research_reader.database.repositories.audio_repository import AudioRepository
from research_reader.database.repositories.document_repository import DocumentRepository
from research_reader.database.repositories.transcreation_repository import (
    TranscreationRepository,
)
from research_reader.logging.logger import Log
from research_reader.ocr.base import BaseOcrEngine
from research_reader.pdf.base import BasePdfExtractor
from research_reader.pdf.factory import PdfExtractorFactory
from research_reader.processor.models import ExtractionResult, SpeechResult, TranscreationResult
from research_reader.processor.pipeline import ExtractionContext, ExtractionPipeline
from research_reader.processor.services import SpeechService, TranscreationService
from research_reader.processor.steps import (
    CacheLookupStep,
    CleanTextStep,
    ExtractTextLayerStep,
    OcrFallbackStep,
    PersistDocumentStep,
    TruncateStep,
    ValidateUploadStep,
)
from research_reader.speech.factory import SpeechClientFactory
from research_reader.transcreation.factory import TranscreationClientFactory


class ReaderPipeline:
    """Entry points consumed by the presentation layer.

    Pipeline: upload -> extract (text layer, OCR fallback) -> transcreate ->
    synthesize, each stage short-circuited by its cache.
    """

    def __init__(
        self,
        extraction: ExtractionPipeline,
        transcreation: TranscreationService,
        speech: SpeechService,
    ) -> None:
        self._extraction = extraction
        self._transcreation = transcreation
        self._speech = speech

    def extract(
        self,
        file_bytes: bytes,
        filename: str,
        size: int | None = None,
        content_type: str | None = None,
    ) -> ExtractionResult:
        file_size = size if size is not None else len(file_bytes)
        Log.info(f"PDF extraction started for {filename} ({file_size} bytes)")
        context = ExtractionContext(
            filename=filename,
            file_bytes=file_bytes,
            file_size=file_size,
            content_type=content_type,
        )
        return self._extraction.run(context)

    def transcreate(
        self,
        text: str,
        target_language: str,
        document_id: int | None = None,
        api_key: str | None = None,
    ) -> TranscreationResult:
        return self._transcreation.transcreate(text, target_language, document_id, api_key)

    def synthesize(
        self,
        text: str,
        language: str,
        transcreation_id: int | None = None,
        api_key: str | None = None,
    ) -> SpeechResult:
        return self._speech.synthesize(text, language, transcreation_id, api_key)

    def close(self) -> None:
        """Release the provider clients held by the services."""
        self._transcreation.close()
        self._speech.close()

    def __enter__(self) -> "ReaderPipeline":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def build_extraction_pipeline(
    settings: Settings,
    doc_repo: DocumentRepository,
    pdf_extractor: BasePdfExtractor | None = None,
    ocr_engine: BaseOcrEngine | None = None,
) -> ExtractionPipeline:
    if pdf_extractor is None:
        pdf_extractor = PdfExtractorFactory.create(settings)
    if ocr_engine is None:
        ocr_engine = PdfExtractorFactory.create_ocr_engine(settings)
    return ExtractionPipeline(
        [
            ValidateUploadStep(settings.max_upload_bytes, settings.min_upload_bytes),
            CacheLookupStep(doc_repo),
            ExtractTextLayerStep(pdf_extractor, settings.max_extract_pages),
            OcrFallbackStep(ocr_engine, settings.ocr_min_text_length),
            CleanTextStep(),
            TruncateStep(settings.extract_max_chars),
            PersistDocumentStep(doc_repo),
        ]
    )


def build_pipeline(settings: Settings, db: Database) -> ReaderPipeline:
    """Build a ReaderPipeline with all required adapters."""
    extraction = build_extraction_pipeline(settings, DocumentRepository(db))
    transcreation = TranscreationService(
        TranscreationRepository(db),
        lambda api_key: TranscreationClientFactory.create(settings, api_key),
    )
    speech = SpeechService(
        AudioRepository(db),
        lambda api_key: SpeechClientFactory.create(settings, api_key),
        max_chars=settings.speech_max_chars,
    )
    return ReaderPipeline(extraction, transcreation, speech)
