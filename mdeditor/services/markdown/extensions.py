# mdeditor/services/markdown/extensions.py
"""
Python-Markdown extensions backing the ExtensionConfig flags that the stock
and pymdownx extensions don't cover.

Pipeline positions (higher priority runs earlier):
  - BlockSpacing preprocessor at 15: after fenced code (25) and raw HTML (20)
    have been stashed, so fence contents are never touched.
  - BackslashLineBreak inline pattern at 185: ahead of backslash escapes (180).
  - HeadingIds treeprocessor at 8: after inline (20), before anchors are set.
  - ExternalLinks / FootnoteBacklinks treeprocessors at 5: after inline (20)
    and footnotes (50) have built their elements.
  - HeadingAnchors treeprocessor at -10: after unescape (0), so heading text
    is final when it is captured.
"""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as etree
from collections.abc import Iterator

from markdown import Markdown, util
from markdown.extensions import Extension
from markdown.inlinepatterns import SubstituteTagInlineProcessor
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from mdeditor.domain.models import HeadingEntry
from mdeditor.services.markdown.slug import slugify

_BLOCK_START_RE = re.compile(r"^ {0,3}(?:(?:[*+-]|\d{1,9}[.)])[ \t]+\S|>)")
_ABSOLUTE_HREF_RE = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*:|//)")
_ESCAPED_CHAR_RE = re.compile(f"{util.STX}([0-9]+){util.ETX}")
# Obfuscated e-mail addresses come out of the inline stage as entity markers.
_AMP_ENTITY_RE = re.compile(
    re.escape(util.AMP_SUBSTITUTE) + r"(#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);"
)
_TAG_RE = re.compile(r"<[^>]*>")
_HEADING_ID_RE = re.compile(r"[ \t]+\{#([^\s{}]+)\}[ \t]*$")


# ---------------------------------------------------------------------------
# tree helpers
# ---------------------------------------------------------------------------


def heading_level(el: etree.Element) -> int | None:
    """Return the heading level (1-6) for an h1..h6 element, else None."""
    tag = el.tag
    if isinstance(tag, str) and len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return int(tag[1])
    return None


def iter_headings(root: etree.Element) -> Iterator[etree.Element]:
    """Yield heading elements in document order (pre-order, depth-first)."""
    stack = [root]
    while stack:
        el = stack.pop()
        if heading_level(el) is not None:
            yield el
            continue
        stack.extend(reversed(list(el)))


def _decode_text(text: str, md: Markdown) -> str:
    """Resolve stash placeholders and escaped-char markers left in tree text."""

    def stashed(m: re.Match[str]) -> str:
        idx = int(m.group(1))
        blocks = md.htmlStash.rawHtmlBlocks
        if idx >= len(blocks):
            return ""
        raw = blocks[idx]
        raw = raw if isinstance(raw, str) else "".join(raw.itertext())
        return html.unescape(_TAG_RE.sub("", raw))

    text = util.HTML_PLACEHOLDER_RE.sub(stashed, text)
    text = _AMP_ENTITY_RE.sub(lambda m: html.unescape(f"&{m.group(1)};"), text)
    return _ESCAPED_CHAR_RE.sub(lambda m: chr(int(m.group(1))), text)


def _is_footnote_ref(el: etree.Element) -> bool:
    if "footnote-ref" in (el.get("class") or "").split():
        return True
    return el.tag == "sup" and any(_is_footnote_ref(child) for child in el)


def _collect_text(el: etree.Element, parts: list[str]) -> None:
    if el.text:
        parts.append(el.text)
    for child in el:
        if not _is_footnote_ref(child):
            _collect_text(child, parts)
        if child.tail:
            parts.append(child.tail)


def heading_text(el: etree.Element, md: Markdown) -> str:
    """
    Literal text of a heading; formatting spans contribute their text only.

    Footnote reference markers are not part of the heading's text.
    """
    parts: list[str] = []
    _collect_text(el, parts)
    return _decode_text("".join(parts), md).strip()


def _remove_keep_tail(parent: etree.Element, child: etree.Element) -> None:
    tail = child.tail or ""
    if tail:
        idx = list(parent).index(child)
        if idx > 0:
            prev = parent[idx - 1]
            prev.tail = (prev.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail
    parent.remove(child)


# ---------------------------------------------------------------------------
# processors
# ---------------------------------------------------------------------------


class HeadingAnchorsTreeprocessor(Treeprocessor):
    """Collect HeadingEntry values and optionally stamp ``id`` attributes."""

    def __init__(self, md: Markdown, *, set_ids: bool) -> None:
        super().__init__(md)
        self.set_ids = set_ids

    def run(self, root: etree.Element) -> None:
        entries: list[HeadingEntry] = []
        for el in iter_headings(root):
            text = heading_text(el, self.md)
            slug = slugify(text)
            if self.set_ids and slug and "id" not in el.attrib:
                el.set("id", slug)
            entries.append(HeadingEntry(level=heading_level(el) or 1, text=text, slug=slug))
        self.md.heading_entries = entries  # type: ignore[attr-defined]


class ExternalLinksTreeprocessor(Treeprocessor):
    def run(self, root: etree.Element) -> None:
        for a in root.iter("a"):
            if _ABSOLUTE_HREF_RE.match(a.get("href", "")):
                a.set("target", "_blank")
                a.set("rel", "noopener noreferrer")


class FootnoteBacklinksTreeprocessor(Treeprocessor):
    """Drop the return links the footnotes extension appends to each note."""

    def run(self, root: etree.Element) -> None:
        for parent in list(root.iter()):
            for child in list(parent):
                if child.tag == "a" and "footnote-backref" in (child.get("class") or "").split():
                    _remove_keep_tail(parent, child)


class HeadingIdsTreeprocessor(Treeprocessor):
    """Move a trailing ``{#custom-id}`` on a heading into its ``id`` attribute."""

    def run(self, root: etree.Element) -> None:
        for el in iter_headings(root):
            last = el[-1] if len(el) else None
            text = last.tail if last is not None else el.text
            m = _HEADING_ID_RE.search(text or "")
            if not m:
                continue
            el.set("id", m.group(1))
            if last is not None:
                last.tail = text[: m.start()]
            else:
                el.text = text[: m.start()]


class BlockSpacingPreprocessor(Preprocessor):
    """Insert the blank line Python-Markdown needs before a list or blockquote
    that directly follows a paragraph line."""

    def run(self, lines: list[str]) -> list[str]:
        out: list[str] = []
        in_block = False
        for line in lines:
            if not line.strip():
                in_block = False
            elif _BLOCK_START_RE.match(line):
                if not in_block and out and out[-1].strip():
                    out.append("")
                in_block = True
            out.append(line)
        return out


# ---------------------------------------------------------------------------
# extensions
# ---------------------------------------------------------------------------


class HeadingAnchorsExtension(Extension):
    def __init__(self, **kwargs) -> None:
        self.config = {"set_ids": [True, "Set id attributes on headings from their slug"]}
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        md.treeprocessors.register(
            HeadingAnchorsTreeprocessor(md, set_ids=self.getConfig("set_ids")),
            "heading_anchors",
            -10,
        )


class HeadingIdsExtension(Extension):
    def extendMarkdown(self, md: Markdown) -> None:
        md.treeprocessors.register(HeadingIdsTreeprocessor(md), "heading_ids", 8)


class BackslashLineBreakExtension(Extension):
    """A backslash at the end of a line forces a ``<br>``."""

    def extendMarkdown(self, md: Markdown) -> None:
        # Ahead of the escape pattern (180), which would otherwise see "\\\n".
        md.inlinePatterns.register(
            SubstituteTagInlineProcessor(r"\\\n", "br"), "backslash_linebreak", 185
        )


class ExternalLinksExtension(Extension):
    def extendMarkdown(self, md: Markdown) -> None:
        md.treeprocessors.register(ExternalLinksTreeprocessor(md), "external_links", 5)


class FootnoteBacklinksExtension(Extension):
    def extendMarkdown(self, md: Markdown) -> None:
        md.treeprocessors.register(FootnoteBacklinksTreeprocessor(md), "strip_backlinks", 5)


class BlockSpacingExtension(Extension):
    def extendMarkdown(self, md: Markdown) -> None:
        md.preprocessors.register(BlockSpacingPreprocessor(md), "block_spacing", 15)


class EscapeHtmlExtension(Extension):
    """Treat raw HTML as text so it is escaped on output."""

    def extendMarkdown(self, md: Markdown) -> None:
        md.preprocessors.deregister("html_block", strict=False)
        md.inlinePatterns.deregister("html", strict=False)
