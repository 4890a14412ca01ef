"""Error taxonomy shared by every pipeline stage.

Each error carries an explicit ``kind`` so callers never need to inspect
message text to decide how to react. Adapters that talk to external services
raise the specific subclass; ``describe_error`` turns anything raised into the
stable payload handed to the presentation layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    INPUT_VALIDATION = "input_validation"
    SIZE = "size"
    FORMAT = "format"
    PARSE = "parse"
    OCR = "ocr"
    AUTH = "auth"
    QUOTA = "quota"
    SERVICE_UNAVAILABLE = "service_unavailable"
    VOICE = "voice"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class ReaderError(Exception):
    """Base exception for all classified pipeline failures."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    retryable: ClassVar[bool] = False
    default_message: ClassVar[str] = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class InputValidationError(ReaderError):
    """Raised when the caller supplied unusable input."""

    kind = ErrorKind.INPUT_VALIDATION
    default_message = "The request is missing required fields."


class SizeError(InputValidationError):
    """Raised when an upload is too large or too small to be a usable PDF."""

    kind = ErrorKind.SIZE
    default_message = "File size is outside the accepted range."


class NotFoundError(ReaderError):
    """Raised when a referenced row does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "The requested record was not found."


class AuthError(ReaderError):
    """Raised when an external service rejects the supplied credentials."""

    kind = ErrorKind.AUTH
    default_message = "Invalid API key. Please check your key and try again."


class QuotaError(ReaderError):
    """Raised when an external service reports a rate or credit limit."""

    kind = ErrorKind.QUOTA
    retryable = True
    default_message = "API quota exceeded. Please try again later."


class ServiceUnavailableError(ReaderError):
    """Raised on transient upstream failures (network, timeouts, 5xx)."""

    kind = ErrorKind.SERVICE_UNAVAILABLE
    retryable = True
    default_message = "The service is temporarily unavailable. Please try again."


class VoiceError(ReaderError):
    """Raised when the speech service cannot use the requested voice."""

    kind = ErrorKind.VOICE
    default_message = "Voice not found or unavailable."


class UpstreamResponseError(ReaderError):
    """Raised when a provider answers with an unusable payload."""

    kind = ErrorKind.UPSTREAM
    default_message = "The service returned an empty or invalid response."


@dataclass(frozen=True)
class ErrorPayload:
    """Stable, outward-facing description of a failure."""

    kind: str
    message: str
    retryable: bool


def describe_error(exc: BaseException) -> ErrorPayload:
    """Translate any exception into its outward classification."""
    if isinstance(exc, ReaderError):
        return ErrorPayload(
            kind=exc.kind.value,
            message=exc.user_message,
            retryable=exc.retryable,
        )
    return ErrorPayload(
        kind=ErrorKind.INTERNAL.value,
        message=ReaderError.default_message,
        retryable=False,
    )
