from __future__ import annotations

import logging
from typing import Any

from markdown import Markdown

from mdeditor.domain.models import DEFAULT_CONFIG, ExtensionConfig, HeadingEntry
from mdeditor.services.markdown.extensions import (
    BackslashLineBreakExtension,
    BlockSpacingExtension,
    EscapeHtmlExtension,
    ExternalLinksExtension,
    FootnoteBacklinksExtension,
    HeadingAnchorsExtension,
    HeadingIdsExtension,
)

logger = logging.getLogger(__name__)


class MarkdownEngineError(RuntimeError):
    """The Markdown library failed internally; the input is never the cause."""


def build_markdown(config: ExtensionConfig = DEFAULT_CONFIG) -> Markdown:
    """
    Build a fresh Markdown instance for one conversion.

    Instances carry per-document state (stash, footnotes, captured headings), so
    they are never shared between calls.
    """
    exts: list[Any] = []
    ext_cfg: dict[str, dict[str, Any]] = {}

    if config.tables:
        exts.append("tables")
    if config.fenced_code:
        exts.append("fenced_code")
    if config.strikethrough:
        exts.append("pymdownx.tilde")
        ext_cfg["pymdownx.tilde"] = {"subscript": False}
    if config.footnotes:
        exts.append("footnotes")
        if not config.footnote_return_links:
            exts.append(FootnoteBacklinksExtension())
    if config.math:
        exts.append("pymdownx.arithmatex")
        # generic=True emits \(..\) / \[..\] wrapped in .arithmatex for MathJax
        ext_cfg["pymdownx.arithmatex"] = {"generic": True}
    if config.autolink:
        exts.append("pymdownx.magiclink")
    if config.definition_lists:
        exts.append("def_list")
    if config.heading_ids:
        exts.append(HeadingIdsExtension())
    if config.backslash_line_break:
        exts.append(BackslashLineBreakExtension())
    if config.smartypants:
        exts.append("smarty")
    if config.no_empty_line_before_block:
        exts.append(BlockSpacingExtension())
    if config.href_target_blank:
        exts.append(ExternalLinksExtension())
    if config.escape_html:
        exts.append(EscapeHtmlExtension())
    exts.append(HeadingAnchorsExtension(set_ids=config.auto_heading_ids))

    return Markdown(extensions=exts, extension_configs=ext_cfg, output_format="html5")


def convert(
    buffer: str, config: ExtensionConfig = DEFAULT_CONFIG
) -> tuple[str, list[HeadingEntry]]:
    """Parse and serialize ``buffer``; return the HTML body and its headings."""
    md = build_markdown(config)
    try:
        body = md.convert(buffer)
    except Exception as e:
        logger.exception("Markdown engine failed on a %d character buffer", len(buffer))
        raise MarkdownEngineError(f"Markdown engine failed: {e}") from e
    return body, list(getattr(md, "heading_entries", []))
