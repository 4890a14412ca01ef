from typing import Any

from psycopg.rows import dict_row

from research_reader.database.connection import Database
from research_reader.database.models import AudioRecord

_COLUMNS = "id, transcreation_id, language, voice_id, audio_size, audio_data, created_at"


class AudioRepository:
    """Database operations for the audio_files table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_latest_by_transcreation(self, transcreation_id: int) -> AudioRecord | None:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM audio_files
                    WHERE transcreation_id = %s
                    ORDER BY created_at DESC, id DESC
                    LIMIT 1
                    """,
                    (transcreation_id,),
                )
                row = cur.fetchone()
        return _to_record(row) if row is not None else None

    def insert(
        self,
        *,
        transcreation_id: int,
        language: str,
        voice_id: str,
        audio_size: int,
        audio_data: str,
    ) -> AudioRecord:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO audio_files
                    (transcreation_id, language, voice_id, audio_size, audio_data)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (transcreation_id, language, voice_id, audio_size, audio_data),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO audio_files returned no row")
        return _to_record(row)

    def delete(self, audio_id: int) -> bool:
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM audio_files WHERE id = %s", (audio_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted


def _to_record(row: dict[str, Any]) -> AudioRecord:
    return AudioRecord(
        id=row["id"],
        transcreation_id=row["transcreation_id"],
        language=row["language"],
        voice_id=row["voice_id"],
        audio_size=row["audio_size"],
        audio_data=row["audio_data"],
        created_at=row["created_at"],
    )
