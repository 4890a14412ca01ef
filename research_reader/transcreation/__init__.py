from research_reader.transcreation.base import BaseTranscreationClient
from research_reader.transcreation.factory import TranscreationClientFactory
from research_reader.transcreation.transcreator import Transcreator

__all__ = ["BaseTranscreationClient", "TranscreationClientFactory", "Transcreator"]
