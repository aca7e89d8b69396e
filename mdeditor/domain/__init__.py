"""Domain layer: interfaces and simple models (dataclasses)."""

from .interfaces import IConfigService, IFileService, IMarkdownRenderer, ISettingsService
from .models import DEFAULT_CONFIG, Document, ExtensionConfig, HeadingEntry

__all__ = [
    "IMarkdownRenderer",
    "IFileService",
    "ISettingsService",
    "IConfigService",
    "Document",
    "HeadingEntry",
    "ExtensionConfig",
    "DEFAULT_CONFIG",
]
