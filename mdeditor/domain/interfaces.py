from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

from mdeditor.domain.models import HeadingEntry


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to HTML and answer document-analysis questions."""

    def to_html(self, markdown_text: str) -> str: ...
    def headings(self, markdown_text: str) -> list[HeadingEntry]: ...
    def toc(self, markdown_text: str) -> str: ...
    def word_count(self, markdown_text: str) -> int: ...


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...
    def create_backup(self, path: Path) -> Path: ...
    def is_modified_externally(self, path: Path, since: float) -> bool: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def get_dark_mode(self, default: bool = False) -> bool: ...
    def set_dark_mode(self, on: bool) -> None: ...
    def get_autosave_enabled(self, default: bool = True) -> bool: ...
    def set_autosave_enabled(self, on: bool) -> None: ...
    def get_autosave_delay(self, default: int = 5) -> int: ...
    def set_autosave_delay(self, seconds: int) -> None: ...


class IConfigService(Protocol):
    """Read-only typed access to INI configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...

    @property
    def loaded_from(self) -> Path | None: ...
