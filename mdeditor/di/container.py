from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from mdeditor.domain.interfaces import IFileService, IMarkdownRenderer, ISettingsService
from mdeditor.domain.models import DEFAULT_CONFIG, ExtensionConfig
from mdeditor.services.config.editor_config import EditorConfig, build_editor_config
from mdeditor.services.file_service import FileService
from mdeditor.services.markdown_renderer import MarkdownRenderer
from mdeditor.services.settings_service import SettingsService
from mdeditor.services.theme_service import ThemeService, ThemeType
from mdeditor.services.ui.main_window import MainWindow
from mdeditor.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Resolves startup preferences (INI defaults, then persisted QSettings)
      - Shares one ThemeService between the renderer's CSS and the window chrome
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        config: EditorConfig | None = None,
        theme: ThemeService | None = None,
        extensions: ExtensionConfig = DEFAULT_CONFIG,
    ) -> None:
        self.config: EditorConfig = config or EditorConfig()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )

        dark = self.settings_service.get_dark_mode(self.config.dark_mode)
        self.theme: ThemeService = theme or ThemeService(
            ThemeType.DARK if dark else ThemeType.LIGHT
        )
        for name, overrides in self.config.color_overrides.items():
            self.theme.apply_overrides(ThemeType(name), overrides)
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer(
            extensions, css_provider=self.theme.preview_css
        )

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config_path: Path | None = None,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        """Build a container from the user's INI config and QSettings store."""
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings, config=build_editor_config(explicit_ini=config_path))

    # ---------- UI factories ----------

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        return MainWindow(
            renderer=self.renderer,
            file_service=self.file_service,
            settings=self.settings_service,
            theme=self.theme,
            config=self.config,
            start_path=start_path,
            app_title=app_title,
        )
