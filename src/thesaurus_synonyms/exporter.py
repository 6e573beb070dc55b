"""Export pipeline for thesaurus-synonyms.

Writes the ``synonyms`` table of one language to an Apache Solr
``synonyms.txt`` file: a ``#`` comment header, a blank line, then one
``synonym1, synonym2 => word`` line per word with synonyms.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from pathlib import Path

from thesaurus_synonyms import db as _db
from thesaurus_synonyms.config import Config
from thesaurus_synonyms.exceptions import DatabaseError, ExportError, OutputWriteError
from thesaurus_synonyms.models import ErrorKind, ExportResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Header text
# ---------------------------------------------------------------------------

LANGUAGE_BANNERS: dict[str, list[str]] = {
    "da_DK": [
        "# --- Synonyms data ---",
        "# The synonyms is based on the Danish thesaurus for OpenOffice / MyThes.",
        "# © 2015 Foreningen for frit tilgængelige sprogværktøjer"
        " - http://www.stavekontrolden.dk",
        "#",
    ],
}

_CONVERSION_NOTICE = [
    "# --- Conversion to synonyms.txt ---",
    "# The conversion of the thesaurus from MyThes-format to Apache Solr"
    " synonyms.txt was done",
    "# by FFW - http://ffwagency.com / Jens Beltofte.",
    "# © 2016 FFW - http://ffwagency.com.",
    "#",
    "# The files are published under the following open source licenses:",
    "#",
    "# GNU GPL version 2.0",
    "# GNU LGPL version 2.1",
    "# Mozilla MPL version 1.1",
    "#",
    "#---------------------------------------------------",
    "#",
]


def generate_header(lang_code: str) -> str:
    """Build the comment header, ending with a blank line."""
    lines = ["#"]
    lines.extend(LANGUAGE_BANNERS.get(lang_code, []))
    lines.extend(_CONVERSION_NOTICE)
    lines.extend(["", ""])
    return "\n".join(lines)


def format_line(word: str, synonyms: str) -> str:
    """Format one ``synonyms => word`` line."""
    return f"{synonyms} => {word}\n"


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class SynonymsFileGenerator:
    """Writes one language of the synonyms table to a synonyms file."""

    def __init__(self, conn: sqlite3.Connection, lang_code: str) -> None:
        self._conn = conn
        self.lang_code = lang_code

    def generate(self, destination: str | Path) -> int:
        """Write the synonyms file, replacing any existing content.

        The table is queried before the file is opened, so a database
        failure leaves no file behind. Returns the number of synonym lines
        written.
        """
        rows = _db.iter_synonym_rows(self._conn, self.lang_code)

        try:
            fp = open(destination, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise ExportError(f"Can't open the synonyms file {destination}: {e}") from e

        count = 0
        try:
            with fp:
                fp.write(generate_header(self.lang_code))
                for row in rows:
                    fp.write(format_line(row["word"], row["synonyms"]))
                    count += 1
        except OSError as e:
            raise OutputWriteError(
                f"Can't write the synonyms file {destination}: {e}"
            ) from e

        logger.info(f"Wrote {count} synonym line(s) for {self.lang_code} to {destination}")
        return count


def run_export(conn: sqlite3.Connection, config: Config) -> ExportResult:
    """Generate the synonyms file configured in ``config``."""
    start_time = time.time()
    result = ExportResult(
        success=False,
        message="",
        lang_code=config.lang_code,
        output_path=config.output_path,
    )

    if config.lang_code not in LANGUAGE_BANNERS:
        logger.debug(f"No language banner for {config.lang_code}")

    try:
        generator = SynonymsFileGenerator(conn, config.lang_code)
        result.lines_written = generator.generate(config.output_path)
    except OutputWriteError as e:
        logger.error(str(e))
        result.message = f"ERROR: {e}"
        result.error_kind = ErrorKind.FILE_WRITE
    except ExportError as e:
        logger.error(str(e))
        result.message = f"ERROR: {e}"
        result.error_kind = ErrorKind.FILE_OPEN
    except (sqlite3.Error, DatabaseError) as e:
        logger.error(f"Database error during export: {e}")
        result.message = f"ERROR: Database error: {e}"
        result.error_kind = ErrorKind.DATABASE
    else:
        result.success = True
        result.message = (
            f"SUCCESS: {config.output_path} file generated successfully."
        )

    result.duration_seconds = time.time() - start_time
    return result
