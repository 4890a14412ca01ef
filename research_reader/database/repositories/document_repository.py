from typing import Any

from psycopg.rows import dict_row

from research_reader.database.connection import Database
from research_reader.database.models import DocumentRecord
from research_reader.errors import NotFoundError

_COLUMNS = """
    id, filename, original_filename, file_size, extracted_text, page_count,
    extracted_pages, processing_status, created_at, updated_at
"""


class DocumentRepository:
    """Database operations for the documents table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_filename_and_size(self, filename: str, file_size: int) -> DocumentRecord | None:
        """Return the most recent document stored under this name and size."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE filename = %s AND file_size = %s
                    ORDER BY created_at DESC, id DESC
                    LIMIT 1
                    """,
                    (filename, file_size),
                )
                row = cur.fetchone()
        return _to_record(row) if row is not None else None

    def find_by_id(self, document_id: int) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            NotFoundError: if no document with this ID exists.
        """
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise NotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    def insert(
        self,
        *,
        filename: str,
        file_size: int,
        extracted_text: str,
        page_count: int,
        extracted_pages: int,
        original_filename: str | None = None,
    ) -> DocumentRecord:
        """Store a freshly extracted document and return the new row."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (filename, original_filename, file_size, extracted_text,
                     page_count, extracted_pages)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        filename,
                        original_filename or filename,
                        file_size,
                        extracted_text,
                        page_count,
                        extracted_pages,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO documents returned no row")
        return _to_record(row)

    def update_status(self, document_id: int, status: str) -> None:
        """Set processing_status and touch updated_at.

        Raises:
            NotFoundError: if no document with this ID exists.
        """
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s, updated_at = NOW()
                    WHERE id = %s
                    """,
                    (status, document_id),
                )
                if cur.rowcount == 0:
                    raise NotFoundError(f"Document {document_id} not found")
            conn.commit()

    def list_recent(self, limit: int = 20) -> list[DocumentRecord]:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    ORDER BY created_at DESC, id DESC
                    LIMIT %s
                    """,
                    (limit,),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def delete(self, document_id: int) -> bool:
        """Delete a document with its transcreations and audio. True if removed."""
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=row["id"],
        filename=row["filename"],
        original_filename=row["original_filename"],
        file_size=row["file_size"],
        extracted_text=row["extracted_text"],
        page_count=row["page_count"],
        extracted_pages=row["extracted_pages"],
        processing_status=row["processing_status"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
