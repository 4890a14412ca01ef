from research_reader.errors import ErrorKind, ReaderError


class OcrError(ReaderError):
    """Raised when the OCR fallback cannot produce any text."""

    kind = ErrorKind.OCR
    default_message = (
        "Could not extract text from PDF. The document may be empty, "
        "corrupted, or an unsupported format."
    )
