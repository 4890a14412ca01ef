"""Example speech client adapter.

Use this module as a reference when implementing new TTS providers.
"""

from typing import ClassVar

from research_reader.speech.base import BaseSpeechClient


class ExampleClientAdapter(BaseSpeechClient):
    """Offline adapter returning a fixed MP3 frame header. No network calls."""

    SILENT_FRAME: ClassVar[bytes] = b"\xff\xfb\x90\x64" + b"\x00" * 28

    def synthesize(self, *, voice_id: str, text: str) -> bytes:
        _ = voice_id, text
        return self.SILENT_FRAME
