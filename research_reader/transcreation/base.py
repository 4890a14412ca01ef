from abc import ABC, abstractmethod

from research_reader.transcreation.models import Completion


class BaseTranscreationClient(ABC):
    """Contract for provider-specific LLM clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Completion:
        """Return the generated text and token usage.

        Raises:
            AuthError: credentials were rejected.
            QuotaError: rate or credit limit reached.
            ServiceUnavailableError: network failure, timeout or provider outage.
            UpstreamResponseError: the provider answered without usable text.
        """

    def close(self) -> None:
        """Release transport resources. Adapters without any keep the no-op."""
