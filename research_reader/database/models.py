from dataclasses import dataclass
from datetime import datetime


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: int
    filename: str
    original_filename: str
    file_size: int
    extracted_text: str
    page_count: int
    extracted_pages: int
    processing_status: str = "completed"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class TranscreationRecord:
    """Represents a row from the transcreations table."""

    id: int
    document_id: int
    target_language: str
    transcreated_text: str
    original_length: int
    transcreated_length: int
    created_at: datetime | None = None


@dataclass
class AudioRecord:
    """Represents a row from the audio_files table."""

    id: int
    transcreation_id: int
    language: str
    voice_id: str | None = None
    audio_size: int | None = None
    audio_data: str | None = None
    created_at: datetime | None = None


@dataclass
class CacheEntry:
    """Represents a row from the cache table."""

    key: str
    value: str
    expires_at: datetime | None = None
    created_at: datetime | None = None
