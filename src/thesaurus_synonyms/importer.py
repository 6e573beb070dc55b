"""Import pipeline for thesaurus-synonyms.

Reads a MyThes thesaurus (``.idx`` + ``.dat``) into the ``synonyms`` table
in two passes. The word pass stores every index entry with its byte offset
into the data file; the synonym pass seeks to each stored offset and fills
in the synonym list.
"""

from __future__ import annotations

import logging
import re
import sqlite3
import time
from collections.abc import Iterable, Iterator
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO

from thesaurus_synonyms import db as _db
from thesaurus_synonyms.config import Config, normalize_encoding
from thesaurus_synonyms.exceptions import ConfigError, DatabaseError, DataImportError
from thesaurus_synonyms.models import ErrorKind, ImportResult, IndexEntry

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

# Non-greedy and not nesting-aware: "x (a (b)) y" becomes "x ) y".
_GLOSS_RE = re.compile(r"\((.*?)\)")

_PROGRESS_EVERY = 10000


# ---------------------------------------------------------------------------
# File readers
# ---------------------------------------------------------------------------

def read_blacklist(
    path: str | Path | None, encoding: str = DEFAULT_ENCODING
) -> set[str]:
    """Load blacklisted words, one per line, trimmed.

    The file must use the same encoding as the thesaurus so that its words
    compare equal to the decoded index words.
    """
    if path is None:
        return set()
    with open(path, "r", encoding=encoding, errors="replace") as f:
        return {line.strip() for line in f if line.strip()}


def detect_encoding(fp: BinaryIO) -> str:
    """Read the encoding declared on the first line of a MyThes file.

    Falls back to UTF-8 when the first line does not name a known text
    codec. The file position is reset to the start.
    """
    fp.seek(0)
    first = fp.readline().strip().decode("ascii", errors="ignore")
    fp.seek(0)
    try:
        return normalize_encoding(first)
    except ConfigError:
        return DEFAULT_ENCODING


def iter_index_entries(
    lines: Iterable[str], blacklist: set[str] | frozenset[str] = frozenset()
) -> Iterator[IndexEntry]:
    """Yield index entries, skipping malformed lines and blacklisted words.

    Only the first two ``|``-separated fields are used. Lines without a word
    or without an integer offset (such as the encoding and count lines at
    the top of a MyThes index) are skipped.
    """
    for line in lines:
        fields = line.rstrip("\r\n").split("|")
        if len(fields) < 2:
            continue
        word, offset = fields[0], fields[1].strip()
        if not word or not offset or word in blacklist:
            continue
        try:
            byte_offset = int(offset)
        except ValueError:
            continue
        if byte_offset < 0:
            continue
        yield IndexEntry(word=word, byte_offset=byte_offset)


def _parse_count(header: str) -> int:
    fields = header.split("|")
    if len(fields) < 2:
        return 0
    try:
        return max(int(fields[1].strip()), 0)
    except ValueError:
        return 0


def find_synonym_lines(
    fp: BinaryIO, byte_offset: int, encoding: str = DEFAULT_ENCODING
) -> list[str]:
    """Read the sense lines of the record stored at ``byte_offset``.

    The header line ``word|count`` is followed by ``count`` sense lines.
    Offsets are not checked against the file size; an offset past the end
    of the file gives no lines.
    """
    fp.seek(byte_offset)
    header = fp.readline().decode(encoding, errors="replace")
    lines = []
    for _ in range(_parse_count(header)):
        raw = fp.readline()
        if not raw:
            break
        lines.append(raw.decode(encoding, errors="replace"))
    return lines


def strip_gloss(token: str) -> str:
    """Remove parenthesized glosses from a synonym and trim it."""
    return _GLOSS_RE.sub("", token).strip()


def parse_synonyms(lines: Iterable[str]) -> list[str]:
    """Collect the distinct synonyms of a record's sense lines.

    The first field of every line is the sense marker and is dropped.
    First-occurrence order is kept.
    """
    synonyms: dict[str, None] = {}
    for line in lines:
        for field in line.rstrip("\r\n").split("|")[1:]:
            word = strip_gloss(field)
            if word:
                synonyms.setdefault(word, None)
    return list(synonyms)


# ---------------------------------------------------------------------------
# Importer
# ---------------------------------------------------------------------------

class ThesaurusImporter:
    """Writes thesaurus words and synonyms for one language into the table."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        lang_code: str,
        *,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._conn = conn
        self.lang_code = lang_code
        self.encoding = encoding

    def import_words(
        self,
        index_file: BinaryIO,
        blacklist: set[str] | frozenset[str] = frozenset(),
    ) -> int:
        """Replace the language's rows with the entries of an index file.

        Returns the number of rows inserted.
        """
        deleted = _db.delete_language(self._conn, self.lang_code)
        logger.info(f"Deleted {deleted} existing row(s) for {self.lang_code}")

        lines = (raw.decode(self.encoding, errors="replace") for raw in index_file)
        count = 0
        for entry in iter_index_entries(lines, blacklist):
            _db.insert_word(self._conn, entry.word, entry.byte_offset, self.lang_code)
            count += 1
            if count % _PROGRESS_EVERY == 0:
                logger.debug(f"Inserted {count} words")

        logger.info(f"Imported {count} word(s) for {self.lang_code}")
        return count

    def import_synonyms(self, data_file: BinaryIO) -> tuple[int, int]:
        """Fill in synonyms for every stored row of the language.

        Returns ``(resolved, empty)``: rows updated and rows left NULL.
        """
        resolved = empty = 0
        for row_id, byte_offset in _db.list_offsets(self._conn, self.lang_code):
            synonyms = parse_synonyms(
                find_synonym_lines(data_file, byte_offset, self.encoding)
            )
            if not synonyms:
                empty += 1
                continue
            _db.set_synonyms(self._conn, row_id, ", ".join(synonyms))
            resolved += 1
            if resolved % _PROGRESS_EVERY == 0:
                logger.debug(f"Resolved {resolved} rows")

        logger.info(
            f"Resolved synonyms for {resolved} row(s) of {self.lang_code}, "
            f"{empty} without synonyms"
        )
        return resolved, empty


def _open_source(stack: ExitStack, path: Path, label: str) -> BinaryIO:
    try:
        return stack.enter_context(open(path, "rb"))
    except OSError as e:
        raise DataImportError(f"Can't open the thesaurus {label} file {path}: {e}") from e


def run_import(
    conn: sqlite3.Connection,
    config: Config,
    *,
    words: bool = True,
    synonyms: bool = True,
) -> ImportResult:
    """Run the word pass and/or the synonym pass.

    All source files are opened and the encoding is resolved before the
    table is touched; a missing file or an unusable encoding gives a failed
    result and leaves the table unchanged. Database errors
    after that point leave whatever was written so far.
    """
    start_time = time.time()
    result = ImportResult(success=False, message="", lang_code=config.lang_code)

    try:
        with ExitStack() as stack:
            index_fp = data_fp = None
            if words:
                index_fp = _open_source(stack, config.thesaurus_index, "index")
            if synonyms:
                data_fp = _open_source(stack, config.thesaurus_data, "data")

            if config.encoding:
                encoding = normalize_encoding(config.encoding)
            else:
                source = data_fp or index_fp
                encoding = (
                    detect_encoding(source) if source is not None else DEFAULT_ENCODING
                )
            logger.debug(f"Reading thesaurus as {encoding}")

            blacklist: set[str] = set()
            if words:
                try:
                    blacklist = read_blacklist(config.blacklist_path, encoding)
                except OSError as e:
                    raise DataImportError(
                        f"Can't read the blacklist file {config.blacklist_path}: {e}"
                    ) from e

            importer = ThesaurusImporter(conn, config.lang_code, encoding=encoding)
            if index_fp is not None:
                result.words_imported = importer.import_words(index_fp, blacklist)
            if data_fp is not None:
                result.rows_resolved, result.rows_without_synonyms = (
                    importer.import_synonyms(data_fp)
                )
    except DataImportError as e:
        logger.error(str(e))
        result.message = f"ERROR: {e}"
        result.error_kind = ErrorKind.FILE_OPEN
    except ConfigError as e:
        logger.error(str(e))
        result.message = f"ERROR: {e}"
        result.error_kind = ErrorKind.CONFIG
    except (sqlite3.Error, DatabaseError) as e:
        logger.error(f"Database error during import: {e}")
        result.message = f"ERROR: Database error: {e}"
        result.error_kind = ErrorKind.DATABASE
    else:
        result.success = True
        result.message = f"SUCCESS: thesaurus imported for {config.lang_code}."

    result.duration_seconds = time.time() - start_time
    return result
