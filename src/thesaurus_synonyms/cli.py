"""
Command-line interface for the thesaurus import and synonyms export jobs.
"""
from __future__ import annotations

import argparse
import logging
import sys
from contextlib import closing
from pathlib import Path
from typing import Optional

from . import __version__
from . import db as _db
from .config import Config, load_config
from .exceptions import ConfigError, DatabaseError
from .exporter import run_export
from .importer import run_import
from .models import ErrorKind, ExportResult, ImportResult

logger = logging.getLogger(__name__)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the thesaurus-synonyms CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
    except (ConfigError, FileNotFoundError) as e:
        print(f"\n  [CONFIG ERROR] {e}")
        return 1

    if config.user or config.password:
        logger.warning("Database credentials are ignored for SQLite databases")

    return args.func(args, config)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="thesaurus-synonyms",
        description="Convert a MyThes thesaurus into a search engine synonyms file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file",
    )
    common.add_argument(
        "--dsn",
        type=str,
        help="Database path or sqlite:/// URL",
    )
    common.add_argument(
        "--lang",
        dest="lang_code",
        type=str,
        help="Language code (default: da_DK)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # import command
    import_parser = subparsers.add_parser(
        "import",
        parents=[common],
        help="Import a thesaurus into the synonyms table",
    )
    import_parser.add_argument(
        "--index",
        dest="index_path",
        type=Path,
        help="Thesaurus index file (default: th_<lang>.idx)",
    )
    import_parser.add_argument(
        "--data",
        dest="data_path",
        type=Path,
        help="Thesaurus data file (default: th_<lang>.dat)",
    )
    import_parser.add_argument(
        "--blacklist",
        dest="blacklist_path",
        type=Path,
        help="File with words to skip, one per line",
    )
    import_parser.add_argument(
        "--encoding",
        type=str,
        help="Thesaurus encoding (default: read from the data file)",
    )
    passes = import_parser.add_mutually_exclusive_group()
    passes.add_argument(
        "--words-only",
        action="store_true",
        help="Only import words from the index file",
    )
    passes.add_argument(
        "--synonyms-only",
        action="store_true",
        help="Only fill in synonyms for previously imported words",
    )
    import_parser.set_defaults(func=cmd_import)

    # export command
    export_parser = subparsers.add_parser(
        "export",
        parents=[common],
        help="Generate a synonyms.txt file from the synonyms table",
    )
    export_parser.add_argument(
        "--output",
        dest="output_path",
        type=Path,
        help="Output file (default: synonyms.txt)",
    )
    export_parser.set_defaults(func=cmd_export)

    # stats command
    stats_parser = subparsers.add_parser(
        "stats",
        parents=[common],
        help="Show row counts for a language",
    )
    stats_parser.add_argument(
        "--list",
        action="store_true",
        help="Also list every word with its synonyms",
    )
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def _load_config(args: argparse.Namespace) -> Config:
    """Merge the config file, environment and command-line options."""
    overrides = {
        name: getattr(args, name, None)
        for name in (
            "dsn", "lang_code", "index_path", "data_path",
            "blacklist_path", "encoding", "output_path",
        )
    }
    return load_config(args.config, **overrides)


def cmd_import(args: argparse.Namespace, config: Config) -> int:
    """Handle import command."""
    words = not args.synonyms_only
    synonyms = not args.words_only

    print(f"\nImporting thesaurus for {config.lang_code}...")
    if words:
        print(f"  Index: {config.thesaurus_index}")
    if synonyms:
        print(f"  Data:  {config.thesaurus_data}")

    try:
        with closing(_db.open_database(config.dsn)) as conn:
            result = run_import(conn, config, words=words, synonyms=synonyms)
    except DatabaseError as e:
        result = ImportResult(
            success=False,
            message=f"ERROR: {e}",
            lang_code=config.lang_code,
            error_kind=ErrorKind.CONNECTION,
        )

    _print_import_result(result)
    return 0 if result.success else 1


def cmd_export(args: argparse.Namespace, config: Config) -> int:
    """Handle export command."""
    print(f"\nExporting synonyms for {config.lang_code} to {config.output_path}...")

    try:
        with closing(_db.open_database(config.dsn)) as conn:
            result = run_export(conn, config)
    except DatabaseError as e:
        result = ExportResult(
            success=False,
            message=f"ERROR: {e}",
            lang_code=config.lang_code,
            error_kind=ErrorKind.CONNECTION,
        )

    _print_export_result(result)
    return 0 if result.success else 1


def cmd_stats(args: argparse.Namespace, config: Config) -> int:
    """Handle stats command."""
    try:
        with closing(_db.open_database(config.dsn)) as conn:
            total, resolved = _db.count_rows(conn, config.lang_code)
            rows = _db.list_rows(conn, config.lang_code) if args.list else []
    except DatabaseError as e:
        print(f"\n  [ERROR] {e}")
        return 1

    print(f"\nSynonyms table for {config.lang_code}:")
    print(f"  Words:         {total}")
    print(f"  With synonyms: {resolved}")
    print(f"  Without:       {total - resolved}")

    if rows:
        print()
    for row in rows:
        print(f"  {row.word} => {row.synonyms or '(none)'}")
    return 0


def _print_import_result(result: ImportResult) -> None:
    """Print import result."""
    print(f"\n{result.message}")
    if result.error_kind is not None:
        print(f"  Reason:   {result.error_kind.value}")
    print(f"\nResults:")
    print(f"  Words imported:   {result.words_imported}")
    print(f"  Rows resolved:    {result.rows_resolved}")
    print(f"  Without synonyms: {result.rows_without_synonyms}")
    print(f"  Time:             {result.duration_seconds:.2f}s")


def _print_export_result(result: ExportResult) -> None:
    """Print export result."""
    print(f"\n{result.message}")
    if result.error_kind is not None:
        print(f"  Reason: {result.error_kind.value}")
    print(f"\nResults:")
    print(f"  Lines:  {result.lines_written}")
    print(f"  Time:   {result.duration_seconds:.2f}s")


if __name__ == "__main__":
    sys.exit(main())
