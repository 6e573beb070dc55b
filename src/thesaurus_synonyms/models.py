"""Domain model dataclasses and enums for thesaurus-synonyms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    """Reasons a batch job can fail."""

    FILE_OPEN = "file_open"
    FILE_WRITE = "file_write"
    CONFIG = "config"
    CONNECTION = "connection"
    DATABASE = "database"


# ---------------------------------------------------------------------------
# Thesaurus records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class IndexEntry:
    """One line of a thesaurus index file."""

    word: str
    byte_offset: int


@dataclass(frozen=True, slots=True)
class SynonymRow:
    """One row of the ``synonyms`` table."""

    id: int
    word: str
    byte_offset: int
    lang_code: str
    synonyms: str | None = None


# ---------------------------------------------------------------------------
# Job results
# ---------------------------------------------------------------------------

@dataclass
class ImportResult:
    """Result of running the thesaurus importer."""

    success: bool
    message: str
    lang_code: str
    words_imported: int = 0
    rows_resolved: int = 0
    rows_without_synonyms: int = 0
    error_kind: ErrorKind | None = None
    duration_seconds: float = 0.0


@dataclass
class ExportResult:
    """Result of generating a synonyms file."""

    success: bool
    message: str
    lang_code: str
    output_path: Path | None = None
    lines_written: int = 0
    error_kind: ErrorKind | None = None
    duration_seconds: float = 0.0
