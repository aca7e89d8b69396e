"""Markdown pipeline: rendering, heading/TOC extraction and word counting."""

from .engine import MarkdownEngineError, build_markdown
from .headings import build_toc, extract_headings, format_toc
from .render import render
from .slug import slugify
from .word_count import count_words

__all__ = [
    "render",
    "extract_headings",
    "format_toc",
    "build_toc",
    "count_words",
    "slugify",
    "build_markdown",
    "MarkdownEngineError",
]
