from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QByteArray, Qt, QTimer
from PyQt6.QtGui import QAction, QFont, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMenu,
    QMessageBox,
    QSplitter,
    QStatusBar,
    QTextBrowser,
    QTextEdit,
    QToolBar,
)

from mdeditor.domain.interfaces import IFileService, IMarkdownRenderer, ISettingsService
from mdeditor.domain.models import Document
from mdeditor.services.autosave_service import AutosaveService
from mdeditor.services.config.editor_config import EditorConfig
from mdeditor.services.file_service import FileService
from mdeditor.services.markdown import MarkdownEngineError, format_toc
from mdeditor.services.theme_service import ThemeService, ThemeType
from mdeditor.utils.constants import APP_NAME, MARKDOWN_FILTER, PREVIEW_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Thin PyQt window that delegates work to injected services (DIP)."""

    def __init__(
        self,
        renderer: IMarkdownRenderer,
        file_service: IFileService,
        settings: ISettingsService,
        *,
        theme: ThemeService | None = None,
        config: EditorConfig | None = None,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self._app_title = app_title
        self.setWindowTitle(app_title)

        self.renderer = renderer
        self.file_service = file_service
        self.settings = settings
        self.config = config or EditorConfig()
        self.theme = theme or ThemeService(
            ThemeType.DARK if settings.get_dark_mode(self.config.dark_mode) else ThemeType.LIGHT
        )

        self.doc = Document(path=None, text="", modified=False)
        self.recents: list[str] = self.settings.get_recent()[: self.config.max_recent_files]
        self.preview_html = ""
        self._loading = False
        # mtime of doc.path as of our last read or write
        self._disk_mtime: float | None = None

        # Widgets
        self.editor = QTextEdit(self)
        self.editor.setAcceptRichText(False)
        family = self.config.font_family.split(",")[0].strip()
        self.editor.setFont(QFont(family, self.config.font_size))
        self.editor.setTabStopDistance(
            self.config.tab_size * self.editor.fontMetrics().horizontalAdvance(" ")
        )

        self.preview = self._create_preview_widget()

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.editor)
        self.splitter.addWidget(self.preview)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.splitter)

        # Debounced live preview
        self._preview_timer = QTimer(self)
        self._preview_timer.setSingleShot(True)
        self._preview_timer.setInterval(PREVIEW_DEBOUNCE_MS)
        self._preview_timer.timeout.connect(self._render_preview)

        self.autosave = AutosaveService(
            save=self._autosave_write,
            can_save=lambda: self.doc.path is not None and self.doc.modified,
            delay_seconds=self.settings.get_autosave_delay(self.config.autosave_delay),
            enabled=self.settings.get_autosave_enabled(self.config.autosave_enabled),
            parent=self,
        )
        self.autosave.autosaved.connect(lambda: self.statusBar().showMessage("Auto-saved", 3000))
        self.autosave.autosave_failed.connect(
            lambda msg: self.statusBar().showMessage(f"Autosave failed: {msg}", 5000)
        )

        # Signals
        self.editor.textChanged.connect(self._on_text_changed)
        self.theme.theme_changed.connect(self._apply_theme)
        self.theme.colors_changed.connect(self._apply_theme)

        # UI
        self._build_actions()
        self._build_toolbar()
        self._build_menu()
        self.setStatusBar(QStatusBar(self))
        self.word_count_label = QLabel("0 words", self)
        self.statusBar().addPermanentWidget(self.word_count_label)

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        else:
            self.resize(self.config.window_width, self.config.window_height)
        split = self.settings.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))

        # Also renders the initial (empty) preview
        self._apply_theme()

        # Load starting content
        self._update_title()
        if start_path:
            self._open_path(start_path)

        # DnD
        self.setAcceptDrops(True)

    # ---------- UI creation ----------
    def _build_actions(self):
        # File actions
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_file
        )
        self.act_open = QAction(
            "Open…",
            self,
            shortcut=QKeySequence.StandardKey.Open,
            triggered=self._open_dialog,
        )
        self.act_save = QAction(
            "Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save
        )
        self.act_save_as = QAction(
            "Save As…",
            self,
            shortcut=QKeySequence.StandardKey.SaveAs,
            triggered=self._save_as,
        )
        self.act_quit = QAction(
            "Quit", self, shortcut=QKeySequence.StandardKey.Quit, triggered=self.close
        )
        self.recent_menu = QMenu("Open Recent", self)

        # View actions
        self.act_toggle_wrap = QAction(
            "Toggle Wrap",
            self,
            checkable=True,
            checked=True,
            triggered=self._toggle_wrap,
        )
        self.act_toggle_preview = QAction(
            "Toggle Preview",
            self,
            checkable=True,
            checked=True,
            triggered=self._toggle_preview,
        )
        self.act_dark_mode = QAction(
            "Dark Mode",
            self,
            checkable=True,
            checked=self.theme.is_dark,
            shortcut="Ctrl+Shift+D",
            triggered=self._toggle_theme,
        )
        self.act_rerender = QAction(
            "Re-render", self, shortcut="Ctrl+R", triggered=self._render_preview
        )

        # Tools
        self.act_insert_toc = QAction(
            "Insert Table of Contents",
            self,
            shortcut="Ctrl+Shift+T",
            triggered=self._insert_toc,
        )
        self.act_copy_toc = QAction("Copy Table of Contents", self, triggered=self._copy_toc)
        self.act_toggle_autosave = QAction(
            "Autosave",
            self,
            checkable=True,
            checked=self.autosave.enabled,
            triggered=self._toggle_autosave,
        )
        self.act_autosave_delay = QAction(
            "Autosave Delay…", self, triggered=self._choose_autosave_delay
        )

    def _build_toolbar(self):
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_open, self.act_save, self.act_save_as):
            tb.addAction(a)
        tb.addSeparator()
        tb.addAction(self.act_toggle_wrap)
        tb.addAction(self.act_toggle_preview)
        tb.addAction(self.act_dark_mode)
        tb.addSeparator()
        tb.addAction(self.act_insert_toc)
        tb.addAction(self.act_toggle_autosave)
        self.addToolBar(tb)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_open)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addSeparator()
        filem.addAction(self.act_quit)
        self._refresh_recent_menu()

        viewm = m.addMenu("&View")
        for a in (
            self.act_toggle_wrap,
            self.act_toggle_preview,
            self.act_dark_mode,
            self.act_rerender,
        ):
            viewm.addAction(a)

        toolsm = m.addMenu("&Tools")
        toolsm.addAction(self.act_insert_toc)
        toolsm.addAction(self.act_copy_toc)
        toolsm.addSeparator()
        toolsm.addAction(self.act_toggle_autosave)
        toolsm.addAction(self.act_autosave_delay)

    def _refresh_recent_menu(self):
        self.recent_menu.clear()
        if not self.recents:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in self.recents:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self._open_path(Path(x)))
            )

    # ---------- File actions ----------
    def _new_file(self):
        if not self._confirm_discard():
            return
        self.autosave.cancel()
        self.doc = Document(path=None, text="", modified=False)
        self._disk_mtime = None
        self._set_editor_text("")
        self._update_title()
        self._render_preview()

    def _open_dialog(self):
        start = str(self.doc.path.parent) if self.doc.path else ""
        path_str, _ = QFileDialog.getOpenFileName(self, "Open Markdown", start, MARKDOWN_FILTER)
        if path_str:
            self._open_path(Path(path_str))

    def _open_path(self, path: Path):
        if not self._confirm_discard():
            return
        try:
            text = self.file_service.read_text(path)
        except (OSError, ValueError, UnicodeDecodeError) as e:
            logger.warning("Failed to open %s: %s", path, e)
            QMessageBox.critical(self, "Open Error", f"Failed to open file:\n{e}")
            return
        self.autosave.cancel()
        self.doc.load(path, text)
        self._disk_mtime = self._mtime(path)
        self._set_editor_text(text)
        self._update_title()
        self._render_preview()
        self._add_recent(path)
        logger.info("Opened %s", path)
        self.statusBar().showMessage("File opened", 3000)

    def _save(self) -> bool:
        if self.doc.path is None:
            return self._save_as()
        if not self._confirm_overwrite(self.doc.path):
            return False
        return self._write_to(self.doc.path)

    def _save_as(self) -> bool:
        start = str(self.doc.path) if self.doc.path else "untitled.md"
        path_str, _ = QFileDialog.getSaveFileName(self, "Save As", start, MARKDOWN_FILTER)
        if not path_str:
            return False
        path = FileService.ensure_extension(Path(path_str))
        if not self._write_to(path):
            return False
        self.doc.mark_saved(path)
        self._update_title()
        self._add_recent(path)
        return True

    def _write_to(self, path: Path) -> bool:
        try:
            self.file_service.write_text_atomic(path, self.editor.toPlainText())
        except OSError as e:
            logger.warning("Failed to save %s: %s", path, e)
            QMessageBox.critical(self, "Save Error", f"Failed to save file:\n{e}")
            return False
        self.autosave.cancel()
        self.doc.mark_saved()
        self._disk_mtime = self._mtime(path)
        self._update_title()
        logger.info("Saved %s", path)
        self.statusBar().showMessage("File saved", 3000)
        return True

    def _autosave_write(self) -> bool:
        # Errors propagate to AutosaveService, which reports them without a modal dialog.
        path = self.doc.path
        if path is None:
            return False
        if self._changed_on_disk(path):
            logger.warning("%s changed on disk; autosave skipped", path)
            self.statusBar().showMessage("File changed on disk; autosave skipped", 5000)
            return False
        self.file_service.write_text_atomic(path, self.editor.toPlainText())
        self.doc.mark_saved()
        self._disk_mtime = self._mtime(path)
        self._update_title()
        return True

    def _changed_on_disk(self, path: Path) -> bool:
        if self._disk_mtime is None or not path.exists():
            return False
        return self.file_service.is_modified_externally(path, self._disk_mtime)

    def _confirm_overwrite(self, path: Path) -> bool:
        """Ask before clobbering a file another program changed; back it up first."""
        if not self._changed_on_disk(path):
            return True
        resp = QMessageBox.question(
            self,
            "File changed on disk",
            f"{path.name} was changed by another program.\n"
            "Overwrite it? The version on disk is kept as a backup.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if resp != QMessageBox.StandardButton.Yes:
            return False
        try:
            backup = self.file_service.create_backup(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to back up %s: %s", path, e)
            QMessageBox.critical(self, "Backup Error", f"Failed to back up file:\n{e}")
            return False
        logger.info("Backed up %s to %s", path, backup)
        return True

    @staticmethod
    def _mtime(path: Path) -> float | None:
        try:
            return path.stat().st_mtime
        except OSError:
            return None

    # ---------- View / tools ----------
    def _toggle_wrap(self, on: bool):
        mode = QTextEdit.LineWrapMode.WidgetWidth if on else QTextEdit.LineWrapMode.NoWrap
        self.editor.setLineWrapMode(mode)

    def _toggle_preview(self, on: bool):
        self.preview.setVisible(on)

    def _toggle_theme(self, _checked: bool = False):
        self.theme.toggle()
        self.settings.set_dark_mode(self.theme.is_dark)

    def _toggle_autosave(self, _checked: bool = False):
        enabled = self.autosave.toggle()
        self.act_toggle_autosave.setChecked(enabled)
        self.settings.set_autosave_enabled(enabled)
        self.statusBar().showMessage(f"Autosave: {'On' if enabled else 'Off'}", 3000)

    def _choose_autosave_delay(self):
        seconds, ok = QInputDialog.getInt(
            self, "Autosave Delay", "Seconds after the last edit:", self.autosave.delay_seconds, 1, 3600
        )
        if ok:
            self.autosave.set_delay(seconds)
            self.settings.set_autosave_delay(seconds)

    def _insert_toc(self):
        headings = self.renderer.headings(self.editor.toPlainText())
        if not headings:
            self.statusBar().showMessage("No headings found", 3000)
            return
        c = self.editor.textCursor()
        c.insertText(format_toc(headings) + "\n")
        self.editor.setTextCursor(c)
        noun = "heading" if len(headings) == 1 else "headings"
        self.statusBar().showMessage(f"Inserted table of contents ({len(headings)} {noun})", 3000)

    def _copy_toc(self):
        toc = self.renderer.toc(self.editor.toPlainText())
        QApplication.clipboard().setText(toc)
        self.statusBar().showMessage("Table of contents copied" if toc else "No headings found", 3000)

    # ---------- Helpers ----------
    def _render_preview(self):
        self._preview_timer.stop()
        try:
            html = self.renderer.to_html(self.editor.toPlainText())
        except MarkdownEngineError as e:
            self.statusBar().showMessage(f"Preview failed: {e}", 5000)
            return
        self.preview_html = html
        # Both QWebEngineView and QTextBrowser implement setHtml(html).
        self.preview.setHtml(html)

    def _set_editor_text(self, text: str):
        self._loading = True
        try:
            self.editor.setPlainText(text)
        finally:
            self._loading = False
        self._update_word_count()

    def _on_text_changed(self):
        if self._loading:
            return
        self.doc.edit(self.editor.toPlainText())
        self.autosave.notify_edit()
        self._update_title()
        self._update_word_count()
        self._preview_timer.start()

    def _update_word_count(self):
        n = self.renderer.word_count(self.editor.toPlainText())
        self.word_count_label.setText(f"{n} {'word' if n == 1 else 'words'}")

    def _update_title(self):
        star = " •" if self.doc.modified else ""
        self.setWindowTitle(f"{self.doc.display_name}{star} — {self._app_title}")

    def _apply_theme(self, *_):
        self.setStyleSheet(self.theme.stylesheet())
        self.act_dark_mode.setChecked(self.theme.is_dark)
        self._render_preview()

    def _confirm_discard(self) -> bool:
        if not self.doc.modified:
            return True
        resp = QMessageBox.question(
            self,
            "Discard changes?",
            "You have unsaved changes. Discard them?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes

    def _add_recent(self, path: Path):
        s = str(path)
        if s in self.recents:
            self.recents.remove(s)
        self.recents.insert(0, s)
        self.recents = self.recents[: self.config.max_recent_files]
        self.settings.set_recent(self.recents)
        self._refresh_recent_menu()

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        urls = e.mimeData().urls()
        if not urls:
            return
        local = urls[0].toLocalFile()
        if local:
            self._open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        self.autosave.flush()
        if not self._confirm_discard():
            event.ignore()
            return
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_splitter(bytes(self.splitter.saveState()))
        super().closeEvent(event)

    # ---------- Internal: preview creation ----------
    def _create_preview_widget(self):
        """
        Prefer QWebEngineView (runs MathJax, full CSS), fall back to QTextBrowser
        when PyQt6-WebEngine isn't installed.
        """
        try:
            from PyQt6.QtWebEngineWidgets import QWebEngineView  # type: ignore
        except ImportError as e:
            logger.info("QWebEngineView unavailable (%s); using QTextBrowser preview", e)
            w = QTextBrowser(self)
            w.setOpenExternalLinks(True)
            return w
        logger.info("Using QWebEngineView preview")
        return QWebEngineView(self)
