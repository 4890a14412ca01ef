import base64
from unittest.mock import MagicMock

import httpx
import pytest

from research_reader.database.models import AudioRecord, TranscreationRecord
from research_reader.database.repositories.audio_repository import AudioRepository
from research_reader.database.repositories.transcreation_repository import (
    TranscreationRepository,
)
from research_reader.errors import InputValidationError
from research_reader.processor.services import SpeechService, TranscreationService
from research_reader.speech.elevenlabs_client_adapter import ElevenLabsClientAdapter
from research_reader.speech.base import BaseSpeechClient
from research_reader.speech.voices import ADAM, BELLA
from research_reader.transcreation.models import Completion
from research_reader.transcreation.transcreator import Transcreator

MP3_BYTES = b"\xff\xfb\x90\x64fake-mp3"


class InMemoryTranscreationRepository:
    def __init__(self) -> None:
        self.rows: list[TranscreationRecord] = []

    def find_latest(self, document_id: int, target_language: str) -> TranscreationRecord | None:
        matches = [
            r for r in self.rows
            if r.document_id == document_id and r.target_language == target_language
        ]
        return matches[-1] if matches else None

    def insert(
        self,
        *,
        document_id: int,
        target_language: str,
        transcreated_text: str,
        original_length: int,
    ) -> TranscreationRecord:
        record = TranscreationRecord(
            id=len(self.rows) + 1,
            document_id=document_id,
            target_language=target_language,
            transcreated_text=transcreated_text,
            original_length=original_length,
            transcreated_length=len(transcreated_text),
        )
        self.rows.append(record)
        return record


def _make_transcreation_service(
    repo: object | None = None,
    text: str = "Hola mundo.",
    tokens: int = 120,
) -> tuple[TranscreationService, MagicMock, MagicMock]:
    if repo is None:
        repo = MagicMock(spec=TranscreationRepository)
        repo.find_latest.return_value = None  # type: ignore[attr-defined]
        repo.insert.return_value = TranscreationRecord(  # type: ignore[attr-defined]
            id=5,
            document_id=7,
            target_language="Spanish",
            transcreated_text=text,
            original_length=11,
            transcreated_length=len(text),
        )
    transcreator = MagicMock(spec=Transcreator)
    transcreator.transcreate.return_value = Completion(text=text, tokens_used=tokens)
    factory = MagicMock(return_value=transcreator)
    service = TranscreationService(repo, factory)  # type: ignore[arg-type]
    return service, transcreator, factory


class TestTranscreationService:
    def test_second_request_is_served_from_cache(self) -> None:
        repo = InMemoryTranscreationRepository()
        service, transcreator, _ = _make_transcreation_service(repo=repo)

        first = service.transcreate("Hello world.", "Spanish", document_id=7)
        second = service.transcreate("Hello world.", "Spanish", document_id=7)

        assert first.cached is False
        assert first.tokens_used == 120
        assert second.cached is True
        assert second.tokens_used == 0
        assert second.text == first.text
        assert second.transcreation_id == first.transcreation_id
        assert transcreator.transcreate.call_count == 1
        assert len(repo.rows) == 1

    def test_other_language_is_not_a_cache_hit(self) -> None:
        repo = InMemoryTranscreationRepository()
        service, transcreator, _ = _make_transcreation_service(repo=repo)
        service.transcreate("Hello world.", "Spanish", document_id=7)
        result = service.transcreate("Hello world.", "Hindi", document_id=7)
        assert result.cached is False
        assert transcreator.transcreate.call_count == 2

    def test_without_document_nothing_is_stored(self) -> None:
        service, transcreator, _ = _make_transcreation_service()
        result = service.transcreate("Hello world.", "French")
        assert result.transcreation_id is None
        assert result.cached is False
        service._repo.find_latest.assert_not_called()  # type: ignore[attr-defined]
        service._repo.insert.assert_not_called()  # type: ignore[attr-defined]
        transcreator.transcreate.assert_called_once_with("Hello world.", "French")

    def test_stores_original_length(self) -> None:
        service, _, _ = _make_transcreation_service()
        service.transcreate("Hello world.", "Spanish", document_id=7)
        kwargs = service._repo.insert.call_args.kwargs  # type: ignore[attr-defined]
        assert kwargs == {
            "document_id": 7,
            "target_language": "Spanish",
            "transcreated_text": "Hola mundo.",
            "original_length": 12,
        }

    def test_forwards_request_api_key(self) -> None:
        service, _, factory = _make_transcreation_service()
        service.transcreate("Hello world.", "Spanish", api_key="user-key")
        factory.assert_called_once_with("user-key")

    @pytest.mark.parametrize("text, language", [("", "Spanish"), ("Hello", ""), ("  ", "Hindi")])
    def test_rejects_missing_fields(self, text: str, language: str) -> None:
        service, transcreator, factory = _make_transcreation_service()
        with pytest.raises(InputValidationError, match="required"):
            service.transcreate(text, language, document_id=7)
        factory.assert_not_called()
        transcreator.transcreate.assert_not_called()

    def test_missing_key_fails_even_with_cached_row(self) -> None:
        repo = MagicMock(spec=TranscreationRepository)
        factory = MagicMock(side_effect=InputValidationError("Transcreation API key is required"))
        service = TranscreationService(repo, factory)
        with pytest.raises(InputValidationError, match="API key"):
            service.transcreate("Hello", "Spanish", document_id=7)
        repo.find_latest.assert_not_called()


def _make_speech_service(
    cached: AudioRecord | None = None,
    max_chars: int = 2000,
) -> tuple[SpeechService, MagicMock, MagicMock]:
    repo = MagicMock(spec=AudioRepository)
    repo.find_latest_by_transcreation.return_value = cached
    repo.insert.return_value = AudioRecord(id=9, transcreation_id=5, language="Spanish")
    client = MagicMock(spec=BaseSpeechClient)
    client.synthesize.return_value = MP3_BYTES
    service = SpeechService(repo, MagicMock(return_value=client), max_chars=max_chars)
    return service, repo, client


class TestSpeechService:
    def test_returns_base64_data_uri(self) -> None:
        service, _, _ = _make_speech_service()
        result = service.synthesize("Hola mundo.", "Spanish")
        prefix = "data:audio/mpeg;base64,"
        assert result.audio_data.startswith(prefix)
        assert base64.b64decode(result.audio_data[len(prefix):]) == MP3_BYTES

    def test_picks_voice_by_language(self) -> None:
        service, _, client = _make_speech_service()
        assert service.synthesize("Namaste.", "Hindi").voice_id == ADAM
        assert service.synthesize("Bonjour.", "French").voice_id == BELLA
        assert client.synthesize.call_args.kwargs["voice_id"] == BELLA

    def test_persists_when_transcreation_given(self) -> None:
        service, repo, _ = _make_speech_service()
        result = service.synthesize("Hola mundo.", "Spanish", transcreation_id=5)
        assert result.audio_id == 9
        assert result.cached is False
        kwargs = repo.insert.call_args.kwargs
        assert kwargs["transcreation_id"] == 5
        assert kwargs["voice_id"] == BELLA
        assert kwargs["audio_size"] == len(MP3_BYTES)
        assert kwargs["audio_data"] == result.audio_data

    def test_without_transcreation_nothing_is_stored(self) -> None:
        service, repo, _ = _make_speech_service()
        result = service.synthesize("Hola mundo.", "Spanish")
        assert result.audio_id is None
        repo.find_latest_by_transcreation.assert_not_called()
        repo.insert.assert_not_called()

    def test_cache_hit_skips_synthesis(self) -> None:
        cached = AudioRecord(
            id=3,
            transcreation_id=5,
            language="Spanish",
            voice_id=BELLA,
            audio_size=10,
            audio_data="data:audio/mpeg;base64,AAAA",
        )
        service, repo, client = _make_speech_service(cached=cached)
        result = service.synthesize("Hola mundo.", "Spanish", transcreation_id=5)
        assert result.cached is True
        assert result.audio_id == 3
        assert result.audio_data == "data:audio/mpeg;base64,AAAA"
        assert result.characters_used == 0
        client.synthesize.assert_not_called()
        repo.insert.assert_not_called()

    def test_cached_row_without_audio_is_regenerated(self) -> None:
        cached = AudioRecord(id=3, transcreation_id=5, language="Spanish", audio_data=None)
        service, repo, client = _make_speech_service(cached=cached)
        result = service.synthesize("Hola mundo.", "Spanish", transcreation_id=5)
        assert result.cached is False
        client.synthesize.assert_called_once()
        repo.insert.assert_called_once()

    def test_truncates_long_text_before_synthesis(self) -> None:
        service, _, client = _make_speech_service()
        text = "x" * 1500 + ". " + "y" * 1000
        result = service.synthesize(text, "Spanish")
        assert client.synthesize.call_args.kwargs["text"] == "x" * 1500 + "."
        assert result.characters_used == 1501
        assert result.truncation is not None
        assert result.truncation.was_truncated is True

    @pytest.mark.parametrize("text, language", [("", "Spanish"), ("Hola", " ")])
    def test_rejects_missing_fields(self, text: str, language: str) -> None:
        service, _, client = _make_speech_service()
        with pytest.raises(InputValidationError, match="required"):
            service.synthesize(text, language)
        client.synthesize.assert_not_called()


class TestProviderClientReuse:
    def test_speech_client_built_once_per_key_and_closed(self) -> None:
        repo = MagicMock(spec=AudioRepository)
        repo.find_latest_by_transcreation.return_value = None
        repo.insert.return_value = AudioRecord(id=9, transcreation_id=5, language="Spanish")
        client = MagicMock(spec=BaseSpeechClient)
        client.synthesize.return_value = MP3_BYTES
        factory = MagicMock(return_value=client)
        service = SpeechService(repo, factory)

        for _ in range(3):
            service.synthesize("Hola mundo.", "Spanish", transcreation_id=5, api_key="xi")

        factory.assert_called_once_with("xi")
        client.close.assert_not_called()
        service.close()
        client.close.assert_called_once()

    def test_cache_hits_do_not_build_extra_clients(self) -> None:
        cached = AudioRecord(
            id=3,
            transcreation_id=5,
            language="Spanish",
            audio_data="data:audio/mpeg;base64,AAAA",
        )
        repo = MagicMock(spec=AudioRepository)
        repo.find_latest_by_transcreation.return_value = cached
        factory = MagicMock(return_value=MagicMock(spec=BaseSpeechClient))
        service = SpeechService(repo, factory)

        service.synthesize("Hola.", "Spanish", transcreation_id=5)
        service.synthesize("Hola.", "Spanish", transcreation_id=5)

        assert factory.call_count == 1

    def test_each_key_gets_its_own_client(self) -> None:
        repo = MagicMock(spec=AudioRepository)
        clients = [MagicMock(spec=BaseSpeechClient), MagicMock(spec=BaseSpeechClient)]
        for client in clients:
            client.synthesize.return_value = MP3_BYTES
        factory = MagicMock(side_effect=clients)
        service = SpeechService(repo, factory)

        service.synthesize("Hola.", "Spanish", api_key="first")
        service.synthesize("Hola.", "Spanish", api_key="second")
        service.synthesize("Hola.", "Spanish", api_key="first")
        service.close()

        assert factory.call_count == 2
        clients[0].close.assert_called_once()
        clients[1].close.assert_called_once()

    def test_closing_releases_elevenlabs_connection_pool(self) -> None:
        http_clients: list[httpx.Client] = []

        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=MP3_BYTES)

        def build(api_key: str | None) -> ElevenLabsClientAdapter:
            http_client = httpx.Client(
                base_url="https://api.elevenlabs.test",
                transport=httpx.MockTransport(respond),
            )
            http_clients.append(http_client)
            return ElevenLabsClientAdapter(api_key=api_key or "xi", http_client=http_client)

        service = SpeechService(MagicMock(spec=AudioRepository), build)
        for _ in range(3):
            service.synthesize("Hola mundo.", "Spanish", api_key="xi")
        service.close()

        assert len(http_clients) == 1
        assert all(client.is_closed for client in http_clients)

    def test_transcreator_reused_and_closed(self) -> None:
        service, transcreator, factory = _make_transcreation_service()
        service.transcreate("Hello.", "Spanish", api_key="k")
        service.transcreate("Hello again.", "Spanish", api_key="k")

        factory.assert_called_once_with("k")
        service.close()
        transcreator.close.assert_called_once()

    def test_failed_client_build_is_retried_next_request(self) -> None:
        transcreator = MagicMock(spec=Transcreator)
        transcreator.transcreate.return_value = Completion(text="Hola.", tokens_used=1)
        factory = MagicMock(
            side_effect=[InputValidationError("Transcreation API key is required"), transcreator]
        )
        service = TranscreationService(MagicMock(spec=TranscreationRepository), factory)

        with pytest.raises(InputValidationError):
            service.transcreate("Hello.", "Spanish")
        assert service.transcreate("Hello.", "Spanish").text == "Hola."
        assert factory.call_count == 2
