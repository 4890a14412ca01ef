from abc import ABC, abstractmethod


class BaseSpeechClient(ABC):
    """Contract for text-to-speech adapters."""

    @abstractmethod
    def synthesize(self, *, voice_id: str, text: str) -> bytes:
        """Return encoded audio (MP3) for ``text`` spoken by ``voice_id``.

        Raises:
            AuthError: credentials were rejected.
            QuotaError: character quota or rate limit reached.
            VoiceError: the voice does not exist or cannot be used.
            ServiceUnavailableError: network failure, timeout or provider outage.
        """

    def close(self) -> None:
        """Release transport resources. Adapters without any keep the no-op."""
