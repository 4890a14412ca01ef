from typing import Any, ClassVar

import httpx

from research_reader.errors import (
    AuthError,
    QuotaError,
    ReaderError,
    ServiceUnavailableError,
    UpstreamResponseError,
    VoiceError,
)
from research_reader.speech.base import BaseSpeechClient

_QUOTA_STATUSES = frozenset({"quota_exceeded", "too_many_concurrent_requests"})
_VOICE_STATUSES = frozenset({"voice_not_found", "voice_not_available"})


class ElevenLabsClientAdapter(BaseSpeechClient):
    """Text-to-speech client for the ElevenLabs REST API."""

    VOICE_SETTINGS: ClassVar[dict[str, object]] = {
        "stability": 0.5,
        "similarity_boost": 0.8,
        "style": 0.5,
        "use_speaker_boost": True,
    }

    def __init__(
        self,
        *,
        api_key: str,
        model_id: str = "eleven_turbo_v2_5",
        output_format: str = "mp3_22050_32",
        base_url: str = "https://api.elevenlabs.io",
        timeout_seconds: int = 60,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._model_id = model_id
        self._output_format = output_format
        self._client = http_client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self._client.headers["xi-api-key"] = api_key

    def synthesize(self, *, voice_id: str, text: str) -> bytes:
        try:
            response = self._client.post(
                f"/v1/text-to-speech/{voice_id}",
                params={"output_format": self._output_format},
                json={
                    "text": text,
                    "model_id": self._model_id,
                    "voice_settings": self.VOICE_SETTINGS,
                },
            )
        except httpx.TransportError as exc:
            raise ServiceUnavailableError(f"Speech provider network error: {exc}") from exc

        if response.is_error:
            raise _classify_error(response, voice_id)
        if not response.content:
            raise UpstreamResponseError("Speech provider returned no audio")
        return response.content

    def close(self) -> None:
        self._client.close()


def _classify_error(response: httpx.Response, voice_id: str) -> ReaderError:
    status = _detail_status(response)
    code = response.status_code
    if status in _QUOTA_STATUSES or code == 429:
        return QuotaError()
    if status in _VOICE_STATUSES or code == 404:
        return VoiceError(f"Voice '{voice_id}' not found or unavailable")
    if code in (401, 403):
        return AuthError(
            "Invalid ElevenLabs API key. Please check your key and try again."
        )
    if code >= 500:
        return ServiceUnavailableError(f"Speech provider error: HTTP {code}")
    return UpstreamResponseError(f"Speech provider rejected the request: HTTP {code}")


def _detail_status(response: httpx.Response) -> str:
    """Read the machine-readable ``detail.status`` field, if present."""
    try:
        body: Any = response.json()
    except ValueError:
        return ""
    if not isinstance(body, dict):
        return ""
    detail = body.get("detail")
    if isinstance(detail, dict):
        return str(detail.get("status", ""))
    return ""
