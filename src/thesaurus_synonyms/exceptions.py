"""Custom exception hierarchy for thesaurus-synonyms."""


class ThesaurusSynonymsError(Exception):
    """Base exception for all thesaurus-synonyms errors."""


class ConfigError(ThesaurusSynonymsError):
    """Invalid configuration (bad YAML, unknown keys)."""


class DataImportError(ThesaurusSynonymsError):
    """Failed to import data (unreadable index, data or blacklist file)."""


class ExportError(ThesaurusSynonymsError):
    """Failed to export (output file cannot be opened for writing)."""


class DatabaseError(ThesaurusSynonymsError):
    """Schema version mismatch, connection failure."""


class OutputWriteError(ExportError):
    """Output file opened but writing it failed (disk full, I/O error)."""
