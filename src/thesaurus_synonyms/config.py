"""
Configuration loading for the import and export jobs.

Settings are merged from, in increasing priority: built-in defaults, an
optional YAML file, ``THESAURUS_*`` environment variables, and explicit
keyword overrides (usually from the command line).

Example YAML file::

    dsn: sqlite:///synonyms.db
    lang_code: da_DK
    index_path: th_da_DK.idx
    data_path: th_da_DK.dat
    blacklist_path: black_list.txt
    output_path: synonyms.txt
"""
from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .exceptions import ConfigError

ENV_PREFIX = "THESAURUS_"

DEFAULT_LANG_CODE = "da_DK"


@dataclass(frozen=True)
class Config:
    """Settings shared by the importer and the exporter."""
    dsn: str = "synonyms.db"
    user: Optional[str] = None
    password: Optional[str] = None
    lang_code: str = DEFAULT_LANG_CODE
    blacklist_path: Optional[Path] = None
    index_path: Optional[Path] = None
    data_path: Optional[Path] = None
    output_path: Path = Path("synonyms.txt")
    encoding: Optional[str] = None

    @property
    def thesaurus_index(self) -> Path:
        """Index file path, ``th_<lang>.idx`` unless configured."""
        return self.index_path or Path(f"th_{self.lang_code}.idx")

    @property
    def thesaurus_data(self) -> Path:
        """Data file path, ``th_<lang>.dat`` unless configured."""
        return self.data_path or Path(f"th_{self.lang_code}.dat")


_FIELD_NAMES = {f.name for f in fields(Config)}
_PATH_FIELDS = {"blacklist_path", "index_path", "data_path", "output_path"}
_CREDENTIAL_FIELDS = {"user", "password"}


def load_config(
    path: Union[str, Path, None] = None,
    env: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Config:
    """Build a Config from a YAML file, the environment and overrides.

    Args:
        path: Optional YAML file with config keys at the root
        env: Environment mapping (defaults to ``os.environ``)
        **overrides: Explicit values; ``None`` values are ignored

    Returns:
        Config object

    Raises:
        ConfigError: If the file is invalid or names unknown keys
        FileNotFoundError: If the file does not exist
    """
    values: Dict[str, Any] = {}

    if path is not None:
        values.update(_load_yaml_file(Path(path)))

    values.update(_from_env(os.environ if env is None else env))
    values.update({k: v for k, v in overrides.items() if v is not None})

    _check_keys(values)
    return replace(Config(), **_coerce(values))


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load YAML from a file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping (dictionary)")

    return data


def _from_env(env: Mapping[str, str]) -> Dict[str, Any]:
    """Collect ``THESAURUS_<FIELD>`` variables."""
    values = {}
    for name in _FIELD_NAMES:
        value = env.get(ENV_PREFIX + name.upper())
        if value:
            values[name] = value
    return values


def _check_keys(values: Mapping[str, Any]) -> None:
    unknown = sorted(set(values) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")


def normalize_encoding(name: str) -> str:
    """Get the canonical name of a text codec.

    Raises:
        ConfigError: If the name is unknown or names a bytes-to-bytes codec
            such as ``hex`` or ``base64``
    """
    try:
        b"".decode(name)
        return codecs.lookup(name).name
    except (LookupError, ValueError) as e:
        raise ConfigError(f"Unknown encoding: {name!r}") from e


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert raw values to the field types of Config."""
    coerced: Dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if key in _PATH_FIELDS and isinstance(value, (str, Path)):
            coerced[key] = Path(value)
        elif key in _CREDENTIAL_FIELDS and isinstance(value, (int, float)):
            coerced[key] = str(value)
        elif not isinstance(value, str):
            raise ConfigError(f"Field '{key}' must be a string")
        elif key == "encoding":
            coerced[key] = normalize_encoding(value)
        else:
            coerced[key] = value
    return coerced
