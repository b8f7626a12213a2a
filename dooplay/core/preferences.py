"""
Preference Store - JSON-backed key/value settings scoped per source.

Each source reads and writes its string preferences under its own scope
(``source_<id>``). Values are persisted atomically and corrupted files are
backed up and replaced with an empty store.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Union

from pydantic import ValidationError

from dooplay.core.config_schemas import PreferencesFile
from dooplay.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Persists per-source string preferences in a single JSON file.

    Provides thread-safe access with atomic writes.
    """

    FILE_NAME = "preferences.json"

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the preference store.

        Args:
            config_dir: Directory holding the preferences file.
                       Defaults to './config' if not specified.
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._preferences_file = self.config_dir / self.FILE_NAME
        self._lock = Lock()
        self._data = self._load()

    def _load(self) -> PreferencesFile:
        """Load and validate the preferences file."""
        if not self._preferences_file.exists():
            logger.debug("Preferences file not found, starting empty")
            return PreferencesFile()

        try:
            with open(self._preferences_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return PreferencesFile.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Invalid preferences file, using defaults: {e}")
            backup_path = self._preferences_file.with_suffix('.json.backup')
            self._preferences_file.replace(backup_path)
            logger.info(f"Corrupted preferences backed up to {backup_path}")
            return PreferencesFile()

    def _save(self) -> None:
        """Write preferences with an atomic replace."""
        temp_file = self._preferences_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(self._data.model_dump(), f, indent=2, ensure_ascii=False)
            temp_file.replace(self._preferences_file)
            logger.debug("Preferences saved successfully")
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise ConfigurationError(
                f"Failed to save preferences: {e}",
                config_path=str(self._preferences_file),
            )

    @staticmethod
    def scope_name(source_id: int) -> str:
        """Scope under which a source stores its preferences."""
        return f"source_{source_id}"

    def get_string(self, scope: str, key: str, default: Optional[str] = None) -> Optional[str]:
        """Read a preference, falling back to ``default`` when unset."""
        with self._lock:
            return self._data.scopes.get(scope, {}).get(key, default)

    def put_string(self, scope: str, key: str, value: str) -> None:
        """Store a preference and persist the file."""
        with self._lock:
            self._data.scopes.setdefault(scope, {})[key] = value
            self._save()
        logger.info(f"Preference {scope}.{key} set to {value!r}")

    def remove(self, scope: str, key: str) -> bool:
        """Delete a preference. Returns whether it existed."""
        with self._lock:
            values = self._data.scopes.get(scope)
            if not values or key not in values:
                return False
            del values[key]
            if not values:
                del self._data.scopes[scope]
            self._save()
            return True

    def scope(self, scope: str) -> Dict[str, str]:
        """Snapshot of every preference stored under a scope."""
        with self._lock:
            return dict(self._data.scopes.get(scope, {}))

    @property
    def path(self) -> Path:
        return self._preferences_file


__all__ = ["PreferenceStore"]
