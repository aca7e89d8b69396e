# mdeditor/services/markdown_renderer.py
from __future__ import annotations

from collections.abc import Callable

from mdeditor.domain.interfaces import IMarkdownRenderer
from mdeditor.domain.models import DEFAULT_CONFIG, ExtensionConfig, HeadingEntry
from mdeditor.services.markdown import build_toc, count_words, extract_headings, render
from mdeditor.utils.constants import CSS_PREVIEW


class MarkdownRenderer(IMarkdownRenderer):
    """
    Preview-facing facade over the Markdown pipeline.

    Holds one ExtensionConfig for both rendering and heading extraction, and
    asks ``css_provider`` for the stylesheet on every render so a theme switch
    shows up on the next refresh.
    """

    def __init__(
        self,
        config: ExtensionConfig = DEFAULT_CONFIG,
        *,
        css_provider: Callable[[], str] | None = None,
    ) -> None:
        self.config = config
        self._css_provider = css_provider or (lambda: CSS_PREVIEW)

    def to_html(self, markdown_text: str) -> str:
        return render(markdown_text, self.config, css=self._css_provider())

    def headings(self, markdown_text: str) -> list[HeadingEntry]:
        return extract_headings(markdown_text, self.config)

    def toc(self, markdown_text: str) -> str:
        return build_toc(markdown_text, self.config)

    def word_count(self, markdown_text: str) -> int:
        return count_words(markdown_text)
