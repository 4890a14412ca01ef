from abc import ABC, abstractmethod
from dataclasses import dataclass

from research_reader.processor.models import ExtractionResult
from research_reader.text.truncation import TruncationResult


@dataclass(slots=True)
class ExtractionContext:
    filename: str
    file_bytes: bytes
    file_size: int
    content_type: str | None = None
    text: str = ""
    page_count: int = 0
    extracted_page_count: int = 0
    used_ocr: bool = False
    truncation: TruncationResult | None = None
    document_id: int | None = None
    cached: bool = False
    done: bool = False

    def to_result(self) -> ExtractionResult:
        if self.truncation is not None:
            original_length = self.truncation.original_length
            was_truncated = self.truncation.was_truncated
        else:
            original_length = len(self.text)
            was_truncated = False
        return ExtractionResult(
            text=self.text,
            page_count=self.page_count,
            extracted_page_count=self.extracted_page_count,
            original_length=original_length,
            extracted_length=len(self.text),
            was_truncated=was_truncated,
            document_id=self.document_id,
            cached=self.cached,
            filename=self.filename,
            used_ocr=self.used_ocr,
        )


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: ExtractionContext) -> ExtractionContext:
        raise NotImplementedError


class ExtractionPipeline:
    """Runs steps in order until one marks the context as done."""

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def run(self, context: ExtractionContext) -> ExtractionResult:
        for step in self._steps:
            if context.done:
                break
            context = step.run(context)
        return context.to_result()
