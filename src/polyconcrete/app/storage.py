"""
Persistent key-value storage backends.

The store only needs string values under string keys. `SettingsStorage` keeps
them in the application's QSettings file; `MemoryStorage` keeps them in a dict.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class SettingsStorage:
    """Storage backed by QSettings. Every write is synced to disk immediately."""

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        # Default QSettings() resolves the file from the organization/app names set in create_app()
        self._settings = settings if settings is not None else QSettings()

    @property
    def settings(self) -> QSettings:
        return self._settings

    def get(self, key: str) -> Optional[str]:
        if not self._settings.contains(key):
            return None
        value = self._settings.value(key, "", type=str)
        return value if isinstance(value, str) else str(value)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        self._sync()

    def remove(self, key: str) -> None:
        self._settings.remove(key)
        self._sync()

    def _sync(self) -> None:
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            logger.warning(f"Could not write settings file '{self._settings.fileName()}': {self._settings.status()}")


class MemoryStorage:
    """Storage kept in process memory. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
