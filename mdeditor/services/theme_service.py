from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from mdeditor.utils.constants import CSS_PREVIEW

logger = logging.getLogger(__name__)


class ThemeType(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class ThemeColors:
    background: str
    background_secondary: str
    text: str
    text_secondary: str
    border: str
    accent: str
    accent_hover: str
    editor_background: str
    preview_background: str
    toolbar: str
    status_bar: str
    highlight: str


LIGHT_COLORS = ThemeColors(
    background="#f9f7f7",
    background_secondary="#f0f0f0",
    text="#2d3436",
    text_secondary="#636e72",
    border="#dfe6e9",
    accent="#74b9ff",
    accent_hover="#0984e3",
    editor_background="#ffffff",
    preview_background="#f9f7f7",
    toolbar="#f5f5f5",
    status_bar="#f0f0f0",
    highlight="rgba(116, 185, 255, 0.2)",
)

DARK_COLORS = ThemeColors(
    background="#2d3436",
    background_secondary="#222626",
    text="#dfe6e9",
    text_secondary="#b2bec3",
    border="#636e72",
    accent="#6c5ce7",
    accent_hover="#a29bfe",
    editor_background="#232323",
    preview_background="#2d3436",
    toolbar="#222626",
    status_bar="#1e2022",
    highlight="rgba(108, 92, 231, 0.2)",
)


class ThemeService(QObject):
    """Owns the light/dark palettes and tells the UI when the active one changes."""

    theme_changed = pyqtSignal(object)  # ThemeType
    colors_changed = pyqtSignal(object)  # ThemeColors

    def __init__(self, theme: ThemeType = ThemeType.LIGHT, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._current = theme
        self._palettes: dict[ThemeType, ThemeColors] = {
            ThemeType.LIGHT: LIGHT_COLORS,
            ThemeType.DARK: DARK_COLORS,
        }

    @property
    def current(self) -> ThemeType:
        return self._current

    @property
    def is_dark(self) -> bool:
        return self._current is ThemeType.DARK

    def set_theme(self, theme: ThemeType) -> None:
        self._current = ThemeType(theme)
        logger.info("Theme set to %s", self._current.value)
        self.theme_changed.emit(self._current)

    def toggle(self) -> ThemeType:
        self.set_theme(ThemeType.LIGHT if self.is_dark else ThemeType.DARK)
        return self._current

    def colors(self, theme: ThemeType) -> ThemeColors:
        return self._palettes[ThemeType(theme)]

    def current_colors(self) -> ThemeColors:
        return self._palettes[self._current]

    def set_custom_colors(self, theme: ThemeType, colors: ThemeColors) -> None:
        theme = ThemeType(theme)
        self._palettes[theme] = colors
        if theme is self._current:
            self.colors_changed.emit(colors)

    def apply_overrides(self, theme: ThemeType, overrides: Mapping[str, str]) -> None:
        """Replace individual palette entries, e.g. from a ``[colors.dark]`` INI section."""
        known = {f.name for f in fields(ThemeColors)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            logger.warning("Ignoring unknown theme colors: %s", ", ".join(unknown))
        valid = {k: v for k, v in overrides.items() if k in known}
        if valid:
            self.set_custom_colors(theme, replace(self.colors(theme), **valid))

    # -------------------- styling --------------------

    def preview_css(self) -> str:
        c = self.current_colors()
        variables = (
            f":root {{ --bg:{c.preview_background}; --fg:{c.text}; --muted:{c.text_secondary}; "
            f"--code:{c.background_secondary}; --border:{c.border}; --link:{c.accent_hover}; }}"
        )
        # The base sheet opens with its own light :root; the later rule wins.
        return CSS_PREVIEW + variables + "\n"

    def stylesheet(self) -> str:
        c = self.current_colors()
        return (
            f"QMainWindow {{ background: {c.background}; color: {c.text}; }}\n"
            f"QTextEdit {{ background: {c.editor_background}; color: {c.text}; "
            f"border: 1px solid {c.border}; selection-background-color: {c.accent}; }}\n"
            f"QTextBrowser {{ background: {c.preview_background}; color: {c.text}; "
            f"border: 1px solid {c.border}; }}\n"
            f"QToolBar {{ background: {c.toolbar}; border: none; }}\n"
            f"QStatusBar {{ background: {c.status_bar}; color: {c.text_secondary}; }}\n"
            f"QMenuBar, QMenu {{ background: {c.background_secondary}; color: {c.text}; }}\n"
            f"QMenu::item:selected {{ background: {c.accent_hover}; }}\n"
        )
