from pathlib import Path

from research_reader.database.connection import Database
from research_reader.logging.logger import Log

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def init_schema(db: Database, schema_path: Path | None = None) -> None:
    """Create all tables and indexes if they do not exist yet."""
    ddl = (schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    with db.connection() as conn:
        conn.execute(ddl)
        conn.commit()
    Log.info("Database schema is up to date")
