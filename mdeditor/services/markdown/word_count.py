from __future__ import annotations

import re

# Order matters: code goes before links so link syntax inside code is dropped
# with the code rather than rewritten.
_FENCED_CODE_RE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE_RE = re.compile(r"`[^`]*`")
_HTML_TAG_RE = re.compile(r"<[^>]*>")
_LINK_RE = re.compile(r"\[([^\[]+)\]\([^)]+\)")


def count_words(buffer: str) -> int:
    """Count whitespace-separated words, ignoring code, HTML tags and link targets."""
    text = _FENCED_CODE_RE.sub("", buffer)
    text = _INLINE_CODE_RE.sub("", text)
    text = _HTML_TAG_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    return len(text.split())
