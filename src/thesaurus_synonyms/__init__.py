__version__ = "0.1.0"

from .config import (
    Config as Config,
    load_config as load_config,
)

from .exceptions import (
    ThesaurusSynonymsError as ThesaurusSynonymsError,
    ConfigError as ConfigError,
    DataImportError as DataImportError,
    ExportError as ExportError,
    OutputWriteError as OutputWriteError,
    DatabaseError as DatabaseError,
)

from .models import (
    ErrorKind as ErrorKind,
    IndexEntry as IndexEntry,
    SynonymRow as SynonymRow,
    ImportResult as ImportResult,
    ExportResult as ExportResult,
)

from .importer import (
    ThesaurusImporter as ThesaurusImporter,
    run_import as run_import,
)

from .exporter import (
    SynonymsFileGenerator as SynonymsFileGenerator,
    run_export as run_export,
)

from .db import open_database as open_database

__all__ = [
    # Configuration
    "Config",
    "load_config",
    # Exceptions
    "ThesaurusSynonymsError",
    "ConfigError",
    "DataImportError",
    "ExportError",
    "OutputWriteError",
    "DatabaseError",
    # Models
    "ErrorKind",
    "IndexEntry",
    "SynonymRow",
    "ImportResult",
    "ExportResult",
    # Jobs
    "ThesaurusImporter",
    "SynonymsFileGenerator",
    "run_import",
    "run_export",
    "open_database",
]
