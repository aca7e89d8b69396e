from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from mdeditor.domain.interfaces import IConfigService
from mdeditor.services.config.ini_config_service import IniConfigService
from mdeditor.utils.constants import DEFAULT_AUTOSAVE_DELAY, MAX_RECENTS


def _project_root_fallback() -> Path:
    """
    Project root that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode walks up from this file
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)
    # editor_config.py -> mdeditor/services/config/editor_config.py
    return Path(__file__).resolve().parents[3]


def _color_overrides(ini: IConfigService) -> dict[str, dict[str, str]]:
    overrides: dict[str, dict[str, str]] = {}
    for theme in ("light", "dark"):
        values = ini.as_dict().get(f"colors.{theme}")
        if values:
            overrides[theme] = dict(values)
    return overrides


@dataclass(frozen=True)
class EditorConfig:
    """Startup preferences; QSettings values saved by the user take precedence."""

    dark_mode: bool = False
    font_size: int = 14
    font_family: str = "Roboto Mono, monospace"
    tab_size: int = 4
    autosave_enabled: bool = True
    autosave_delay: int = DEFAULT_AUTOSAVE_DELAY
    window_width: int = 1024
    window_height: int = 768
    max_recent_files: int = MAX_RECENTS
    # theme name -> {ThemeColors field: value}, from [colors.light] / [colors.dark]
    color_overrides: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    @classmethod
    def from_ini(cls, ini: IConfigService) -> EditorConfig:
        d = cls()

        def pos_int(section: str, key: str, default: int) -> int:
            v = ini.get_int(section, key, default)
            return v if v is not None and v > 0 else default

        return cls(
            dark_mode=bool(ini.get_bool("theme", "dark_mode", d.dark_mode)),
            font_size=pos_int("editor", "font_size", d.font_size),
            font_family=(ini.get("editor", "font_family", d.font_family) or d.font_family).strip(),
            tab_size=pos_int("editor", "tab_size", d.tab_size),
            autosave_enabled=bool(ini.get_bool("autosave", "enabled", d.autosave_enabled)),
            autosave_delay=pos_int("autosave", "delay_seconds", d.autosave_delay),
            window_width=pos_int("window", "width", d.window_width),
            window_height=pos_int("window", "height", d.window_height),
            max_recent_files=pos_int("files", "max_recent", d.max_recent_files),
            color_overrides=_color_overrides(ini),
        )


def build_editor_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> EditorConfig:
    root = project_root or _project_root_fallback()
    return EditorConfig.from_ini(IniConfigService(explicit_path=explicit_ini, project_root=root))
