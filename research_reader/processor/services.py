import base64
from collections.abc import Callable
from typing import TypeVar

from research_reader.database.repositories.audio_repository import AudioRepository
from research_reader.database.repositories.transcreation_repository import (
    TranscreationRepository,
)
from research_reader.errors import InputValidationError
from research_reader.logging.logger import Log
from research_reader.processor.models import SpeechResult, TranscreationResult
from research_reader.speech.base import BaseSpeechClient
from research_reader.speech.voices import voice_for
from research_reader.text.truncation import truncate_for_speech
from research_reader.transcreation.transcreator import Transcreator

AUDIO_MIME_TYPE = "audio/mpeg"

TranscreatorProvider = Callable[[str | None], Transcreator]
SpeechClientProvider = Callable[[str | None], BaseSpeechClient]

_ClientT = TypeVar("_ClientT")


def _client_for(
    clients: dict[str | None, _ClientT],
    factory: Callable[[str | None], _ClientT],
    api_key: str | None,
) -> _ClientT:
    """Build the client for a key once and hand the same instance back afterwards."""
    client = clients.get(api_key)
    if client is None:
        client = factory(api_key)
        clients[api_key] = client
    return client


def _require(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise InputValidationError(message)
    return value


class TranscreationService:
    """Transcreates text, reusing the newest stored result per (document, language)."""

    def __init__(
        self,
        transcreation_repo: TranscreationRepository,
        transcreator_factory: TranscreatorProvider,
    ) -> None:
        self._repo = transcreation_repo
        self._transcreator_factory = transcreator_factory
        self._transcreators: dict[str | None, Transcreator] = {}

    def transcreate(
        self,
        text: str,
        target_language: str,
        document_id: int | None = None,
        api_key: str | None = None,
    ) -> TranscreationResult:
        _require(text, "Text and target language are required")
        _require(target_language, "Text and target language are required")
        transcreator = _client_for(self._transcreators, self._transcreator_factory, api_key)

        if document_id is not None:
            cached = self._repo.find_latest(document_id, target_language)
            if cached is not None:
                Log.info(f"Returning cached transcreation {cached.id}")
                return TranscreationResult(
                    text=cached.transcreated_text,
                    transcreation_id=cached.id,
                    tokens_used=0,
                    cached=True,
                )

        Log.info(f"Starting transcreation to {target_language}")
        completion = transcreator.transcreate(text, target_language)

        transcreation_id: int | None = None
        if document_id is not None:
            record = self._repo.insert(
                document_id=document_id,
                target_language=target_language,
                transcreated_text=completion.text,
                original_length=len(text),
            )
            transcreation_id = record.id
            Log.info(f"Stored new transcreation with ID {transcreation_id}")

        return TranscreationResult(
            text=completion.text,
            transcreation_id=transcreation_id,
            tokens_used=completion.tokens_used,
            cached=False,
        )

    def close(self) -> None:
        for transcreator in self._transcreators.values():
            transcreator.close()
        self._transcreators.clear()


class SpeechService:
    """Narrates text, reusing the newest stored audio per transcreation."""

    def __init__(
        self,
        audio_repo: AudioRepository,
        client_factory: SpeechClientProvider,
        max_chars: int = 2000,
    ) -> None:
        self._repo = audio_repo
        self._client_factory = client_factory
        self._clients: dict[str | None, BaseSpeechClient] = {}
        self._max_chars = max_chars

    def synthesize(
        self,
        text: str,
        language: str,
        transcreation_id: int | None = None,
        api_key: str | None = None,
    ) -> SpeechResult:
        _require(text, "Text and language are required")
        _require(language, "Text and language are required")
        client = _client_for(self._clients, self._client_factory, api_key)

        if transcreation_id is not None:
            cached = self._repo.find_latest_by_transcreation(transcreation_id)
            if cached is not None and cached.audio_data:
                Log.info(f"Returning cached audio {cached.id}")
                return SpeechResult(
                    audio_data=cached.audio_data,
                    audio_id=cached.id,
                    voice_id=cached.voice_id,
                    characters_used=0,
                    cached=True,
                )

        truncation = truncate_for_speech(text, self._max_chars)
        voice_id = voice_for(language)
        Log.info(f"Generating audio for language {language} with voice {voice_id}")
        audio = client.synthesize(voice_id=voice_id, text=truncation.text)
        audio_data = f"data:{AUDIO_MIME_TYPE};base64,{base64.b64encode(audio).decode('ascii')}"
        Log.info(
            f"Audio generation successful: {len(audio)} bytes from "
            f"{truncation.final_length} of {truncation.original_length} chars"
        )

        audio_id: int | None = None
        if transcreation_id is not None:
            record = self._repo.insert(
                transcreation_id=transcreation_id,
                language=language,
                voice_id=voice_id,
                audio_size=len(audio),
                audio_data=audio_data,
            )
            audio_id = record.id
            Log.info(f"Audio stored with ID {audio_id}")

        return SpeechResult(
            audio_data=audio_data,
            audio_id=audio_id,
            voice_id=voice_id,
            characters_used=truncation.final_length,
            cached=False,
            truncation=truncation,
        )

    def close(self) -> None:
        for client in self._clients.values():
            client.close()
        self._clients.clear()
