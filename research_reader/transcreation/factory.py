from typing import ClassVar

from research_reader.config.settings import Settings
from research_reader.errors import InputValidationError
from research_reader.transcreation.base import BaseTranscreationClient
from research_reader.transcreation.example_client_adapter import ExampleClientAdapter
from research_reader.transcreation.openai_client_adapter import OpenAIClientAdapter
from research_reader.transcreation.transcreator import Transcreator


class TranscreationClientFactory:
    """Creates the configured transcreation client and transcreator."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    }

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def create_client(
        cls,
        settings: Settings,
        api_key: str | None = None,
    ) -> BaseTranscreationClient:
        """Build a client; a per-request key overrides the configured one."""
        provider = settings.transcreation_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        key = (api_key or settings.transcreation_api_key).strip()
        if not key:
            raise InputValidationError("Transcreation API key is required")
        return OpenAIClientAdapter(
            api_key=key,
            timeout_seconds=settings.transcreation_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def create(cls, settings: Settings, api_key: str | None = None) -> Transcreator:
        return Transcreator(
            client=cls.create_client(settings, api_key),
            model=settings.transcreation_model_name,
            temperature=settings.transcreation_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.transcreation_base_url.strip()
            if not url:
                raise ValueError(
                    "transcreation_base_url is required for "
                    "transcreation_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.transcreation_base_url.strip() or default_base_url
        raise ValueError(
            f"Unknown transcreation provider '{provider}'. "
            f"Choose from: {cls.supported_providers()}"
        )
