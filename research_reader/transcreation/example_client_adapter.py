"""Example transcreation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseTranscreationClient and register the provider in
TranscreationClientFactory.
"""

from research_reader.transcreation.base import BaseTranscreationClient
from research_reader.transcreation.models import Completion


class ExampleClientAdapter(BaseTranscreationClient):
    """Offline adapter that echoes the prompt's source text.

    No network calls. Useful for local development and tests.
    """

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Completion:
        _ = model, temperature, system_prompt
        parts = user_prompt.split("---")
        body = parts[1].strip() if len(parts) >= 3 else user_prompt.strip()
        return Completion(text=body, tokens_used=len(user_prompt.split()))
