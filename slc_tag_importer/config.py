"""
Importer settings.

An import run needs three inputs: the CSV file, the communication driver,
and the station under that driver whose ``Tags`` folder receives the tags.
They are held in :class:`ImporterSettings` and can come from a dict, a JSON
file, or ``SLC_IMPORT_*`` environment variables (which override the file).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping, Optional
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

ENV_PREFIX = 'SLC_IMPORT_'

_ENV_KEYS = {
    'csv_path': ENV_PREFIX + 'CSV_PATH',
    'driver': ENV_PREFIX + 'DRIVER',
    'station': ENV_PREFIX + 'STATION',
    'namespace_path': ENV_PREFIX + 'NAMESPACE',
}


def normalize_path(raw_path: str) -> str:
    """Normalize a user-supplied path into a real filesystem path.

    Handles:
    - file:///C:/... URIs
    - URL-encoded characters (%20 for spaces, etc.)
    - Relative paths (resolved against cwd)
    - Surrounding quotes or whitespace

    An empty input stays empty so a missing path can still be reported.
    """
    path = (raw_path or '').strip().strip('"').strip("'")
    if not path:
        return ''

    if path.startswith("file:///"):
        parsed = urlparse(path)
        # On Windows, urlparse gives /C:/path -- strip leading slash
        decoded = unquote(parsed.path)
        if len(decoded) >= 3 and decoded[0] == '/' and decoded[2] == ':':
            decoded = decoded[1:]
        path = decoded
    elif path.startswith("file://"):
        path = unquote(path[7:])

    path = os.path.normpath(path)
    return os.path.abspath(path)


@dataclass
class ImporterSettings:
    """Inputs of the parameterless import trigger."""
    csv_path: str = ""
    driver: str = ""
    station: str = ""
    namespace_path: str = ""

    def __post_init__(self):
        self.csv_path = normalize_path(self.csv_path)
        self.namespace_path = normalize_path(self.namespace_path)
        self.driver = (self.driver or '').strip()
        self.station = (self.station or '').strip()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ImporterSettings':
        """Build settings from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown settings: %s", sorted(unknown))
        return cls(**{k: str(v) for k, v in data.items() if k in known and v is not None})

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> 'ImporterSettings':
        """Return a copy with ``SLC_IMPORT_*`` environment overrides applied."""
        environ = os.environ if environ is None else environ
        overrides = {
            key: environ[var] for key, var in _ENV_KEYS.items() if environ.get(var)
        }
        if not overrides:
            return self
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        return asdict(self)


def load_settings(
    file_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ImporterSettings:
    """Load settings from a JSON file (optional) plus environment overrides.

    Raises:
        FileNotFoundError: If *file_path* is given and does not exist.
        ValueError: If the file does not hold a JSON object.
    """
    data: Mapping[str, Any] = {}
    if file_path:
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Settings file not found: {file_path}")
        logger.info("Loading importer settings: %s", file_path)
        with open(file_path, 'r', encoding='utf-8') as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(
                f"Settings file must contain a JSON object, got {type(data).__name__}"
            )
    return ImporterSettings.from_dict(data).with_env(environ)
