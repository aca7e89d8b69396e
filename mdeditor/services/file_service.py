from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from mdeditor.domain.interfaces import IFileService

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


class FileService(IFileService):
    """Atomic reads/writes for text files, plus a few path helpers."""

    def read_text(self, path: Path) -> str:
        if str(path) in ("", "."):
            raise ValueError("File path cannot be empty")
        return path.read_text(encoding="utf-8")

    def write_text_atomic(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        sf.write(text.encode("utf-8"))
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")
        logger.debug("Wrote %d chars to %s", len(text), path)

    @staticmethod
    def ensure_extension(path: Path | None) -> Path:
        """Keep .md/.markdown paths as they are; append .md to anything else."""
        if path is None or str(path) in ("", "."):
            return Path("untitled.md")
        if path.suffix.lower() in MARKDOWN_SUFFIXES:
            return path
        return path.with_name(path.name + ".md")

    def create_backup(self, path: Path) -> Path:
        """Copy ``path`` to a hidden ``.<name>.bak`` sibling and return it."""
        backup = path.with_name(f".{path.name}.bak")
        self.write_text_atomic(backup, self.read_text(path))
        return backup

    @staticmethod
    def is_modified_externally(path: Path, since: float) -> bool:
        """True when the file's mtime is newer than ``since`` (epoch seconds)."""
        return path.stat().st_mtime > since
