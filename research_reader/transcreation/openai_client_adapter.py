import httpx
import openai

from research_reader.errors import (
    AuthError,
    QuotaError,
    ServiceUnavailableError,
    UpstreamResponseError,
)
from research_reader.transcreation.base import BaseTranscreationClient
from research_reader.transcreation.models import Completion

_INVALID_KEY_MESSAGE = "Invalid transcreation API key. Please check your key and try again."
_INVALID_KEY_REASONS = frozenset({"API_KEY_INVALID", "API_KEY_EXPIRED"})
_AUTH_STATUSES = frozenset({"UNAUTHENTICATED", "PERMISSION_DENIED"})


class OpenAIClientAdapter(BaseTranscreationClient):
    """Transcreation client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Completion:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthError(_INVALID_KEY_MESSAGE) from exc
        except openai.RateLimitError as exc:
            raise QuotaError() from exc
        except openai.NotFoundError as exc:
            raise ServiceUnavailableError(
                f"AI model '{model}' temporarily unavailable. Please try again."
            ) from exc
        except openai.BadRequestError as exc:
            # Gemini's OpenAI-compatible endpoint rejects bad keys with a 400.
            if _is_invalid_key(exc.body):
                raise AuthError(_INVALID_KEY_MESSAGE) from exc
            raise UpstreamResponseError(f"AI provider rejected the request: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ServiceUnavailableError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            if exc.status_code >= 500:
                raise ServiceUnavailableError(f"AI provider API error: {exc}") from exc
            raise UpstreamResponseError(f"AI provider rejected the request: {exc}") from exc
        except openai.APIError as exc:
            raise UpstreamResponseError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise UpstreamResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise UpstreamResponseError("AI returned empty response")

        tokens_used = response.usage.total_tokens if response.usage is not None else 0
        return Completion(text=content.strip(), tokens_used=tokens_used)

    def close(self) -> None:
        self._client.close()


def _is_invalid_key(body: object) -> bool:
    """Read Google's structured error: ``details[].reason`` or ``status``."""
    errors = body if isinstance(body, list) else [body]
    for item in errors:
        if not isinstance(item, dict):
            continue
        error = item.get("error", item)
        if not isinstance(error, dict):
            continue
        if error.get("status") in _AUTH_STATUSES:
            return True
        details = error.get("details")
        if isinstance(details, list) and any(
            isinstance(d, dict) and d.get("reason") in _INVALID_KEY_REASONS for d in details
        ):
            return True
    return False
