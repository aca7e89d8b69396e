from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Document:
    path: Path | None
    text: str
    modified: bool = False

    def edit(self, text: str) -> None:
        """Replace the buffer; any mutation leaves the document dirty."""
        self.text = text
        self.modified = True

    def load(self, path: Path, text: str) -> None:
        self.path = path
        self.text = text
        self.modified = False

    def mark_saved(self, path: Path | None = None) -> None:
        if path is not None:
            self.path = path
        self.modified = False

    @property
    def display_name(self) -> str:
        return self.path.name if self.path else "Untitled"


@dataclass(frozen=True)
class HeadingEntry:
    level: int
    text: str
    slug: str


@dataclass(frozen=True)
class ExtensionConfig:
    """
    Feature flags for parsing and rendering.

    Parse flags select the grammar extensions; render flags shape the HTML output.
    Extraction and rendering must share one instance so heading anchors line up.
    """

    # parse
    tables: bool = True
    fenced_code: bool = True
    strikethrough: bool = True
    auto_heading_ids: bool = True
    no_empty_line_before_block: bool = True
    footnotes: bool = True
    math: bool = True
    autolink: bool = True
    definition_lists: bool = True
    heading_ids: bool = True
    backslash_line_break: bool = True

    # render
    href_target_blank: bool = True
    complete_page: bool = True
    footnote_return_links: bool = True
    smartypants: bool = True
    escape_html: bool = False


DEFAULT_CONFIG = ExtensionConfig()
