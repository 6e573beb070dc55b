"""Shared test fixtures for thesaurus-synonyms."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from thesaurus_synonyms import Config, db

# (headword, sense lines) in data file order
SAMPLE_RECORDS = [
    ("fish", ["1|trout(freshwater)|salmon(freshwater)", "2|cod(saltwater)"]),
    ("happy", ["(adj)|glad|cheerful (generic term)|glad", "(adj)|content"]),
    ("nothing", []),
    ("spam", ["(noun)|junk mail"]),
]


@dataclass
class Thesaurus:
    """Paths and offsets of a thesaurus written for a test."""
    index_path: Path
    data_path: Path
    offsets: dict = field(default_factory=dict)


def write_thesaurus(directory, records, encoding="UTF-8", name="th_test"):
    """Write a MyThes .idx/.dat pair with correct byte offsets."""
    codec = "latin-1" if encoding.upper().startswith("ISO8859-1") else "utf-8"
    data = f"{encoding}\n".encode(codec)
    offsets = {}
    for word, senses in records:
        offsets[word] = len(data)
        data += f"{word}|{len(senses)}\n".encode(codec)
        for sense in senses:
            data += f"{sense}\n".encode(codec)

    index = f"{encoding}\n{len(records)}\n"
    for word, _ in records:
        index += f"{word}|{offsets[word]}\n"

    index_path = Path(directory) / f"{name}.idx"
    data_path = Path(directory) / f"{name}.dat"
    index_path.write_bytes(index.encode(codec))
    data_path.write_bytes(data)
    return Thesaurus(index_path=index_path, data_path=data_path, offsets=offsets)


@pytest.fixture
def conn():
    """Create an initialized in-memory database."""
    connection = db.open_database(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def thesaurus(tmp_path):
    """The sample thesaurus written to a temporary directory."""
    return write_thesaurus(tmp_path, SAMPLE_RECORDS)


@pytest.fixture
def config(tmp_path, thesaurus):
    """Config pointing at the sample thesaurus, language 'en_US'."""
    return Config(
        dsn=":memory:",
        lang_code="en_US",
        index_path=thesaurus.index_path,
        data_path=thesaurus.data_path,
        output_path=tmp_path / "synonyms.txt",
    )
