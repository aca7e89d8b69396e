from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from mdeditor.utils.constants import DEFAULT_AUTOSAVE_DELAY

logger = logging.getLogger(__name__)


class AutosaveService(QObject):
    """
    Debounced autosave for the editing session.

    Every edit restarts one single-shot timer; when it fires, ``save`` runs only
    if ``can_save`` says the document has a path and unsaved changes.
    """

    autosaved = pyqtSignal()
    autosave_failed = pyqtSignal(str)
    enabled_changed = pyqtSignal(bool)

    def __init__(
        self,
        *,
        save: Callable[[], bool],
        can_save: Callable[[], bool],
        delay_seconds: int = DEFAULT_AUTOSAVE_DELAY,
        enabled: bool = True,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._save = save
        self._can_save = can_save
        self._enabled = enabled

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)
        self.set_delay(delay_seconds)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def delay_seconds(self) -> int:
        return self._timer.interval() // 1000

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)
        if not self._enabled:
            self._timer.stop()
        self.enabled_changed.emit(self._enabled)

    def toggle(self) -> bool:
        self.set_enabled(not self._enabled)
        return self._enabled

    def set_delay(self, seconds: int) -> None:
        self._timer.setInterval(max(1, int(seconds)) * 1000)

    def notify_edit(self) -> None:
        if self._enabled:
            self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def flush(self) -> bool:
        """Save right away if autosave would have; used on shutdown."""
        self._timer.stop()
        if not self._enabled:
            return False
        return self._run()

    # -------------------- internals --------------------

    def _on_timeout(self) -> None:
        self._run()

    def _run(self) -> bool:
        if not self._can_save():
            return False
        try:
            ok = self._save()
        except OSError as e:
            logger.warning("Autosave failed: %s", e)
            self.autosave_failed.emit(str(e))
            return False
        if ok:
            logger.info("Autosaved document")
            self.autosaved.emit()
        return ok
