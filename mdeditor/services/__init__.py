"""Concrete service implementations."""

from .autosave_service import AutosaveService
from .file_service import FileService
from .markdown_renderer import MarkdownRenderer
from .settings_service import SettingsService
from .theme_service import ThemeService, ThemeType

__all__ = [
    "AutosaveService",
    "FileService",
    "MarkdownRenderer",
    "SettingsService",
    "ThemeService",
    "ThemeType",
]
