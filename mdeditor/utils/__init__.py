"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    DEFAULT_AUTOSAVE_DELAY,
    HTML_TEMPLATE,
    MAX_RECENTS,
    PREVIEW_DEBOUNCE_MS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_SPLITTER,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "CSS_PREVIEW",
    "HTML_TEMPLATE",
    "SETTINGS_GEOMETRY",
    "SETTINGS_SPLITTER",
    "SETTINGS_RECENTS",
    "MAX_RECENTS",
    "DEFAULT_AUTOSAVE_DELAY",
    "PREVIEW_DEBOUNCE_MS",
]
