from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    from gherkinpad.settings import APP_NAME, LOG_LEVELS, AppSettings
    from gherkinpad.ui.main_window import MainWindow
else:
    from .settings import APP_NAME, LOG_LEVELS, AppSettings
    from .ui.main_window import MainWindow

LOG_LEVEL_ENV = "GHERKINPAD_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(settings: AppSettings) -> int:
    override = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    name = override if override in LOG_LEVELS else settings.log_level
    return logging.getLevelName(name)


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(level=resolve_log_level(settings), format=LOG_FORMAT)


def main() -> int:
    settings = AppSettings.load()
    configure_logging(settings)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)
    app.setStyle("Fusion")

    window = MainWindow(settings=settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
