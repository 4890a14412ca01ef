from research_reader.errors import ErrorKind, ReaderError


class PdfExtractionError(ReaderError):
    """Base exception for text-layer extraction failures."""


class FormatError(PdfExtractionError):
    """Raised when the buffer does not carry the PDF magic marker."""

    kind = ErrorKind.FORMAT
    default_message = "Invalid PDF file format. Please ensure you uploaded a valid PDF."


class ParseError(PdfExtractionError):
    """Raised when the PDF parser fails on malformed structure."""

    kind = ErrorKind.PARSE
    default_message = "PDF parsing failed."
