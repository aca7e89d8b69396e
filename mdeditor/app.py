from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from mdeditor.di.container import Container
from mdeditor.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = logging.DEBUG if os.environ.get("MDEDITOR_DEBUG") else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    configure_logging()
    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default()

    # Optional file path to open passed as first CLI argument
    start_path = Path(argv[1]) if len(argv) > 1 else None
    logger.info("Starting %s%s", APP_NAME, f" with {start_path}" if start_path else "")

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    return app.exec()
