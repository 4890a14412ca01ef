import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from research_reader.config.settings import Settings
from research_reader.database.connection import Database
from research_reader.database.repositories.cache_repository import CacheRepository
from research_reader.database.repositories.stats_repository import StatsRepository
from research_reader.database.schema import init_schema
from research_reader.errors import InputValidationError, ReaderError, describe_error
from research_reader.logging.logger import Log
from research_reader.processor.processor import build_pipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="research-reader")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("init-db", help="create tables if missing")
    commands.add_parser("stats", help="print row counts per table")
    commands.add_parser("cleanup-cache", help="delete expired cache entries")
    extract = commands.add_parser("extract", help="extract text from a PDF")
    extract.add_argument("path", type=Path)
    return parser


def run(args: argparse.Namespace, settings: Settings, db: Database) -> dict[str, object]:
    if args.command == "init-db":
        init_schema(db)
        return {"success": True}
    if args.command == "stats":
        return {"success": True, "stats": StatsRepository(db).get_stats()}
    if args.command == "cleanup-cache":
        return {"success": True, "removed": CacheRepository(db).cleanup_expired()}
    path: Path = args.path
    try:
        pdf_bytes = path.read_bytes()
    except OSError as exc:
        raise InputValidationError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    with build_pipeline(settings, db) as pipeline:
        result = pipeline.extract(pdf_bytes, path.name)
    return {"success": True, **asdict(result)}


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> open database -> run command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    with Database.from_settings(settings) as db:
        try:
            payload = run(args, settings, db)
        except ReaderError as exc:
            Log.error(f"{args.command} failed: {exc}")
            print(json.dumps({"success": False, "error": asdict(describe_error(exc))}))
            return 1

    print(json.dumps(payload, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
