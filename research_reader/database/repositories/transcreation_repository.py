from typing import Any

from psycopg.rows import dict_row

from research_reader.database.connection import Database
from research_reader.database.models import TranscreationRecord

_COLUMNS = """
    id, document_id, target_language, transcreated_text,
    original_length, transcreated_length, created_at
"""


class TranscreationRepository:
    """Database operations for the transcreations table.

    Rows are append-only; lookups return the newest row for a key.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_latest(self, document_id: int, target_language: str) -> TranscreationRecord | None:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM transcreations
                    WHERE document_id = %s AND target_language = %s
                    ORDER BY created_at DESC, id DESC
                    LIMIT 1
                    """,
                    (document_id, target_language),
                )
                row = cur.fetchone()
        return _to_record(row) if row is not None else None

    def list_by_document(self, document_id: int) -> list[TranscreationRecord]:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM transcreations
                    WHERE document_id = %s
                    ORDER BY created_at DESC, id DESC
                    """,
                    (document_id,),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def insert(
        self,
        *,
        document_id: int,
        target_language: str,
        transcreated_text: str,
        original_length: int,
    ) -> TranscreationRecord:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO transcreations
                    (document_id, target_language, transcreated_text,
                     original_length, transcreated_length)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        document_id,
                        target_language,
                        transcreated_text,
                        original_length,
                        len(transcreated_text),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO transcreations returned no row")
        return _to_record(row)

    def delete(self, transcreation_id: int) -> bool:
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM transcreations WHERE id = %s", (transcreation_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted


def _to_record(row: dict[str, Any]) -> TranscreationRecord:
    return TranscreationRecord(
        id=row["id"],
        document_id=row["document_id"],
        target_language=row["target_language"],
        transcreated_text=row["transcreated_text"],
        original_length=row["original_length"],
        transcreated_length=row["transcreated_length"],
        created_at=row["created_at"],
    )
