"""Desktop Markdown editor with live preview, autosave and document outline tools."""

__version__ = "1.0.0"
