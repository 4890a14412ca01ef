from psycopg.rows import dict_row

from research_reader.database.connection import Database
from research_reader.database.models import CacheEntry
from research_reader.logging.logger import Log


class CacheRepository:
    """Generic key/value memoization with optional expiry."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` unless it is missing or expired."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT key, value, expires_at, created_at
                    FROM cache
                    WHERE key = %s AND (expires_at IS NULL OR expires_at > NOW())
                    """,
                    (key,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return CacheEntry(
            key=row["key"],
            value=row["value"],
            expires_at=row["expires_at"],
            created_at=row["created_at"],
        )

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Insert or replace ``key``. Without a TTL the entry never expires."""
        with self._db.connection() as conn:
            conn.execute(
                """
                INSERT INTO cache (key, value, expires_at)
                VALUES (
                    %s, %s,
                    CASE WHEN %s::integer IS NULL THEN NULL
                         ELSE NOW() + make_interval(secs => %s::integer)
                    END
                )
                ON CONFLICT (key) DO UPDATE
                SET value = EXCLUDED.value,
                    expires_at = EXCLUDED.expires_at,
                    created_at = NOW()
                """,
                (key, value, ttl_seconds, ttl_seconds),
            )
            conn.commit()

    def delete(self, key: str) -> None:
        with self._db.connection() as conn:
            conn.execute("DELETE FROM cache WHERE key = %s", (key,))
            conn.commit()

    def cleanup_expired(self) -> int:
        """Remove expired entries and return how many were deleted."""
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM cache WHERE expires_at IS NOT NULL AND expires_at <= NOW()"
                )
                removed = cur.rowcount
            conn.commit()
        Log.info(f"Cleaned up {removed} expired cache entries")
        return removed
