from __future__ import annotations

from collections.abc import Iterable

from PyQt6.QtCore import QByteArray, QSettings

from mdeditor.domain.interfaces import ISettingsService
from mdeditor.utils.constants import (
    DEFAULT_AUTOSAVE_DELAY,
    SETTINGS_AUTOSAVE_DELAY,
    SETTINGS_AUTOSAVE_ENABLED,
    SETTINGS_DARK_MODE,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_SPLITTER,
)


def _as_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    return default


class SettingsService(ISettingsService):
    """Persist small UI bits: geometry, splitter, recent files and user toggles."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_splitter(self) -> bytes | None:
        v = self._s.value(SETTINGS_SPLITTER)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_splitter(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_SPLITTER, QByteArray(blob))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        # INI backends hand a single-element list back as a plain string
        if isinstance(v, str):
            return [v] if v else []
        return [str(x) for x in v] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent))

    def get_dark_mode(self, default: bool = False) -> bool:
        return _as_bool(self._s.value(SETTINGS_DARK_MODE), default)

    def set_dark_mode(self, on: bool) -> None:
        self._s.setValue(SETTINGS_DARK_MODE, bool(on))

    def get_autosave_enabled(self, default: bool = True) -> bool:
        return _as_bool(self._s.value(SETTINGS_AUTOSAVE_ENABLED), default)

    def set_autosave_enabled(self, on: bool) -> None:
        self._s.setValue(SETTINGS_AUTOSAVE_ENABLED, bool(on))

    def get_autosave_delay(self, default: int = DEFAULT_AUTOSAVE_DELAY) -> int:
        value = self._s.value(SETTINGS_AUTOSAVE_DELAY, default)
        try:
            return max(1, int(value))
        except (TypeError, ValueError):
            return default

    def set_autosave_delay(self, seconds: int) -> None:
        self._s.setValue(SETTINGS_AUTOSAVE_DELAY, max(1, int(seconds)))
