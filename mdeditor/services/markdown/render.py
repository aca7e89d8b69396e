from __future__ import annotations

from mdeditor.domain.models import DEFAULT_CONFIG, ExtensionConfig
from mdeditor.services.markdown.engine import convert
from mdeditor.utils.constants import CSS_PREVIEW, HTML_TEMPLATE, MATHJAX_SCRIPTS


def render(
    buffer: str,
    config: ExtensionConfig = DEFAULT_CONFIG,
    *,
    css: str = CSS_PREVIEW,
) -> str:
    """
    Convert ``buffer`` to HTML.

    An empty buffer short-circuits to "" without touching the parser. With
    ``complete_page`` the body is wrapped in a standalone document styled by
    ``css``; MathJax is appended when math is enabled.
    """
    if not buffer:
        return ""

    body, _ = convert(buffer, config)
    if not config.complete_page:
        return body

    if config.math:
        body += MATHJAX_SCRIPTS
    return HTML_TEMPLATE.format(css=css, body=body)
