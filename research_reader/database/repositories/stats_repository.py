from research_reader.database.connection import Database

TABLES = ("documents", "transcreations", "audio_files", "cache")


class StatsRepository:
    """Row counts per table, used as a health check."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get_stats(self) -> dict[str, int]:
        stats: dict[str, int] = {}
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                for table in TABLES:
                    # Table names come from the fixed tuple above.
                    cur.execute(f"SELECT COUNT(*) FROM {table}")
                    row = cur.fetchone()
                    stats[table] = int(row[0]) if row is not None else 0
        return stats
