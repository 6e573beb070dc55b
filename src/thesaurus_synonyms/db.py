"""Database connection, DDL, and low-level CRUD for thesaurus-synonyms."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

from thesaurus_synonyms.exceptions import DatabaseError
from thesaurus_synonyms.models import SynonymRow

SCHEMA_VERSION = "1.0"

_SQLITE_URL_PREFIX = "sqlite:///"

# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

_DDL = """
-- Meta table
CREATE TABLE IF NOT EXISTS meta (
    key TEXT NOT NULL,
    value TEXT,
    UNIQUE (key)
);

-- Synonyms table (no uniqueness on word/lang_code; imports truncate first)
CREATE TABLE IF NOT EXISTS synonyms (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    word TEXT NOT NULL,
    byte_offset INTEGER NOT NULL,
    lang_code TEXT NOT NULL,
    synonyms TEXT
);
CREATE INDEX IF NOT EXISTS synonyms_lang_code_index ON synonyms (lang_code);
"""


def dsn_to_path(dsn: str | Path) -> str:
    """Turn a DSN (``sqlite:///path``, a plain path or ``:memory:``) into a path."""
    dsn_str = str(dsn)
    if dsn_str.startswith(_SQLITE_URL_PREFIX):
        dsn_str = dsn_str[len(_SQLITE_URL_PREFIX):] or ":memory:"
    return dsn_str


def connect(dsn: str | Path = ":memory:") -> sqlite3.Connection:
    """Open a database connection in autocommit mode.

    Every statement is committed on its own; an interrupted run leaves
    whatever was written so far.
    """
    db_path_str = dsn_to_path(dsn)
    try:
        conn = sqlite3.connect(db_path_str, isolation_level=None)
        if db_path_str != ":memory:":
            conn.execute("PRAGMA journal_mode = WAL")
    except sqlite3.Error as e:
        raise DatabaseError(f"Connection failed: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Initialize all tables if they don't exist. Set schema version."""
    conn.executescript(_DDL)
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) VALUES ('schema_version', ?)",
        (SCHEMA_VERSION,),
    )
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) "
        "VALUES ('created_at', strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
    )


def check_schema_version(conn: sqlite3.Connection) -> None:
    """Verify the database schema version is compatible."""
    try:
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        # meta table doesn't exist - uninitialized DB
        return
    if row is None:
        return
    version = row[0]
    if version != SCHEMA_VERSION:
        raise DatabaseError(
            f"Incompatible schema version: {version} "
            f"(expected {SCHEMA_VERSION})"
        )


def open_database(dsn: str | Path = ":memory:") -> sqlite3.Connection:
    """Connect, check the schema version and create missing tables."""
    conn = connect(dsn)
    try:
        check_schema_version(conn)
        init_db(conn)
    except sqlite3.Error as e:
        conn.close()
        raise DatabaseError(f"Failed to initialize database: {e}") from e
    except DatabaseError:
        conn.close()
        raise
    return conn


# ---------------------------------------------------------------------------
# Synonym row helpers
# ---------------------------------------------------------------------------

def delete_language(conn: sqlite3.Connection, lang_code: str) -> int:
    """Delete every row for a language code. Returns the number deleted."""
    cur = conn.execute(
        "DELETE FROM synonyms WHERE lang_code = ?",
        (lang_code,),
    )
    return cur.rowcount


def insert_word(
    conn: sqlite3.Connection,
    word: str,
    byte_offset: int,
    lang_code: str,
) -> int:
    """Insert a word with its data file offset; synonyms stay NULL."""
    cur = conn.execute(
        "INSERT INTO synonyms (word, byte_offset, lang_code) VALUES (?, ?, ?)",
        (word, byte_offset, lang_code),
    )
    return cur.lastrowid  # type: ignore[return-value]


def list_offsets(
    conn: sqlite3.Connection, lang_code: str
) -> list[tuple[int, int]]:
    """Get ``(id, byte_offset)`` for every row of a language."""
    rows = conn.execute(
        "SELECT id, byte_offset FROM synonyms WHERE lang_code = ? ORDER BY id",
        (lang_code,),
    ).fetchall()
    return [(r["id"], r["byte_offset"]) for r in rows]


def set_synonyms(conn: sqlite3.Connection, row_id: int, synonyms: str) -> None:
    """Store the joined synonym string for one row."""
    conn.execute(
        "UPDATE synonyms SET synonyms = ? WHERE id = ?",
        (synonyms, row_id),
    )


def iter_synonym_rows(
    conn: sqlite3.Connection, lang_code: str
) -> Iterator[sqlite3.Row]:
    """Iterate ``(word, synonyms)`` rows of a language that have synonyms."""
    return iter(conn.execute(
        "SELECT word, synonyms FROM synonyms "
        "WHERE lang_code = ? AND synonyms IS NOT NULL ORDER BY id",
        (lang_code,),
    ).fetchall())


def list_rows(conn: sqlite3.Connection, lang_code: str) -> list[SynonymRow]:
    """Get every row of a language as :class:`SynonymRow` objects."""
    rows = conn.execute(
        "SELECT id, word, byte_offset, lang_code, synonyms FROM synonyms "
        "WHERE lang_code = ? ORDER BY id",
        (lang_code,),
    ).fetchall()
    return [
        SynonymRow(
            id=r["id"],
            word=r["word"],
            byte_offset=r["byte_offset"],
            lang_code=r["lang_code"],
            synonyms=r["synonyms"],
        )
        for r in rows
    ]


def count_rows(conn: sqlite3.Connection, lang_code: str) -> tuple[int, int]:
    """Get ``(total, resolved)`` row counts for a language."""
    row = conn.execute(
        "SELECT COUNT(*), COUNT(synonyms) FROM synonyms WHERE lang_code = ?",
        (lang_code,),
    ).fetchone()
    return row[0], row[1]
