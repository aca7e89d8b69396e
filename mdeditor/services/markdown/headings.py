from __future__ import annotations

from collections.abc import Iterable

from mdeditor.domain.models import DEFAULT_CONFIG, ExtensionConfig, HeadingEntry
from mdeditor.services.markdown.engine import convert


def extract_headings(
    buffer: str, config: ExtensionConfig = DEFAULT_CONFIG
) -> list[HeadingEntry]:
    """
    Return one HeadingEntry per heading block, in document order.

    Parsing goes through the same Markdown factory as ``render`` so the slugs
    here are exactly the ids stamped on the preview's headings.
    """
    if not buffer:
        return []
    _, headings = convert(buffer, config)
    return headings


def format_toc(headings: Iterable[HeadingEntry]) -> str:
    """Render headings as a nested Markdown list; levels are not validated."""
    lines = [f"{'  ' * (h.level - 1)}- [{h.text}](#{h.slug})" for h in headings]
    return "\n".join(lines)


def build_toc(buffer: str, config: ExtensionConfig = DEFAULT_CONFIG) -> str:
    return format_toc(extract_headings(buffer, config))
