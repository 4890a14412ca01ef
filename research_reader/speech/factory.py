from research_reader.config.settings import Settings
from research_reader.errors import InputValidationError
from research_reader.speech.base import BaseSpeechClient
from research_reader.speech.elevenlabs_client_adapter import ElevenLabsClientAdapter
from research_reader.speech.example_client_adapter import ExampleClientAdapter


class SpeechClientFactory:
    """Creates the configured text-to-speech client."""

    PROVIDERS = ("example", "elevenlabs")

    @classmethod
    def create(cls, settings: Settings, api_key: str | None = None) -> BaseSpeechClient:
        """Build a client; a per-request key overrides the configured one."""
        provider = settings.speech_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider != "elevenlabs":
            raise ValueError(
                f"Unknown speech provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        key = (api_key or settings.elevenlabs_api_key).strip()
        if not key:
            raise InputValidationError("ElevenLabs API key is required")
        return ElevenLabsClientAdapter(
            api_key=key,
            model_id=settings.elevenlabs_model_id,
            output_format=settings.elevenlabs_output_format,
            base_url=settings.elevenlabs_base_url,
            timeout_seconds=settings.elevenlabs_timeout_seconds,
        )
