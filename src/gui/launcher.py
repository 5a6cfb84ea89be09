"""Launcher for the desktop app (``python -m gui`` or ``fredcharts gui``).

Wires the collaborators explicitly: persisted config, series store, API
key (argument or ``FRED_API_KEY``) and the log capture feeding the console.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from config import settings
from db.series_store import SqliteSeriesStore
from gui.app.config_store import load_config
from gui.services.logging_service import LoggingService
from services.fred_client import api_key_from_env

log = logging.getLogger(__name__)


def main(
    *,
    api_key: str | None = None,
    db_path: str | None = None,
    config_dir: str | Path | None = None,
) -> int:  # pragma: no cover - runtime
    from PyQt6.QtWidgets import QApplication

    from gui.main_window import MainWindow

    logging_service = LoggingService()
    logging_service.attach_root()
    app = QApplication.instance() or QApplication(sys.argv)
    config = load_config(config_dir)
    store = SqliteSeriesStore(db_path or config.db_path or settings.default_db_path())
    win = MainWindow(
        config,
        store,
        api_key if api_key is not None else api_key_from_env(),
        config_dir=config_dir,
        logging_service=logging_service,
    )
    win.show()
    log.info("Main window shown")
    try:
        return app.exec()
    finally:
        store.close()
        logging_service.detach_root()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
