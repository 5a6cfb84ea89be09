"""Main window: chart on the left, output console on the right.

Collaborators are passed in explicitly (app config, series store, API key,
logging service); the window owns the in-session ``SeriesCache`` and the
chart widget. Fetches run on ``FetchWorker`` threads and their results
are applied on the GUI thread in ``_on_fetch_finished``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QFont, QTextCursor
from PyQt6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QSplitter,
)

from db.series_store import SqliteSeriesStore
from domain.models import FetchParams, SeriesRecord
from domain.time_series import TimeSeries
from gui.app.config_store import AppConfig, save_config
from gui.chart_widget import ChartWidget
from gui.dialogs import ApiKeyDialog, FetchDialog, ManageSeriesDialog, StoredSeriesDialog
from gui.services.logging_service import LogEntry, LoggingService
from gui.workers import FetchWorker
from parsing.errors import ParsingError
from parsing.importers import import_file
from services.fred_client import FredApiError, FredClient
from services.series_cache import SeriesCache
from services.summary import format_series_summary

log = logging.getLogger(__name__)

_RULE = "=" * 60


class _ConsoleBridge(QObject):
    """Carries log lines from any thread to the console on the GUI thread."""

    line = pyqtSignal(str)


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: AppConfig,
        store: SqliteSeriesStore,
        api_key: str = "",
        *,
        config_dir: str | Path | None = None,
        logging_service: Optional[LoggingService] = None,
    ):
        super().__init__()
        self.setWindowTitle("FRED Economic Data")
        self.config = config
        self.store = store
        self.api_key = api_key
        self.config_dir = config_dir
        self.cache = SeriesCache()
        self._workers: List[FetchWorker] = []
        self._logging = logging_service
        self._bridge = _ConsoleBridge()
        self._bridge.line.connect(self.append_output, Qt.ConnectionType.QueuedConnection)

        self._build_ui()
        self._build_menus()
        self._restore_geometry()
        if self._logging is not None:
            self._logging.add_listener(self._on_log_entry)
        self.append_output("Welcome. Use Data > Fetch series to load FRED data.\n")
        if not self.api_key:
            self.append_output("No API key configured. Set one under Settings > API key.\n")
        self.update_status(self.store.status())

    # UI --------------------------------------------------------------
    def _build_ui(self) -> None:
        self.chart = ChartWidget(dark=self.config.dark_mode)
        self.console = QPlainTextEdit()
        self.console.setReadOnly(True)
        self.console.setFont(QFont("Consolas", 10))
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.chart)
        splitter.addWidget(self.console)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        self.setCentralWidget(splitter)
        self.chart.setVisible(self.config.chart_visible)
        self.console.setVisible(self.config.console_visible)
        self._apply_theme()

    def _build_menus(self) -> None:
        mb = self.menuBar()
        data = mb.addMenu("Data")
        self._add_action(data, "Fetch series...", self.open_fetch_dialog, "Ctrl+F")
        self._add_action(data, "Import CSV...", lambda: self.import_data("CSV files (*.csv)"))
        self._add_action(data, "Import JSON...", lambda: self.import_data("JSON files (*.json)"))
        data.addSeparator()
        self._add_action(data, "Manage comparison series...", self.manage_series, "Ctrl+M")
        self._add_action(data, "Export chart...", self.export_chart, "Ctrl+E")

        db = mb.addMenu("Database")
        self._add_action(db, "Load from store...", self.load_from_store)
        self._add_action(db, "Save active series", self.save_active_series)
        self._add_action(db, "Store status", self.show_store_status)
        db.addSeparator()
        self._add_action(db, "Clear store", self.clear_store)

        view = mb.addMenu("View")
        self.act_dark = self._add_action(view, "Dark mode", self.toggle_dark_mode, "Ctrl+D")
        self.act_dark.setCheckable(True)
        self.act_dark.setChecked(self.config.dark_mode)
        self._add_action(view, "Toggle console", self.toggle_console)
        self._add_action(view, "Toggle chart", self.toggle_chart)

        settings_menu = mb.addMenu("Settings")
        self._add_action(settings_menu, "API key...", self.open_api_key_dialog)

    def _add_action(self, menu, text: str, slot, shortcut: str | None = None) -> QAction:
        act = QAction(text, self)
        if shortcut:
            act.setShortcut(shortcut)
        act.triggered.connect(lambda _checked=False: slot())  # type: ignore[attr-defined]
        menu.addAction(act)
        return act

    def _restore_geometry(self) -> None:
        cfg = self.config
        if cfg.is_geometry_complete():
            self.setGeometry(cfg.window_x, cfg.window_y, cfg.window_w, cfg.window_h)  # type: ignore[arg-type]
        else:
            self.resize(1400, 800)

    def _apply_theme(self) -> None:
        self.chart.set_dark(self.config.dark_mode)
        if self.config.dark_mode:
            self.console.setStyleSheet("background-color: #1E1E1E; color: #DCDCDC;")
        else:
            self.console.setStyleSheet("")

    # Console ---------------------------------------------------------
    def append_output(self, text: str) -> None:
        self.console.moveCursor(QTextCursor.MoveOperation.End)
        self.console.insertPlainText(text)
        self.console.ensureCursorVisible()

    def update_status(self, text: str) -> None:
        self.statusBar().showMessage(text)

    def _on_log_entry(self, entry: LogEntry) -> None:
        if entry.level in ("WARNING", "ERROR", "CRITICAL"):
            self._bridge.line.emit(f"[{entry.level}] {entry.message}\n")

    # Chart -----------------------------------------------------------
    def refresh_chart(self) -> None:
        self.chart.set_series(self.cache.active_series())

    def add_series(self, ts: TimeSeries) -> None:
        self.cache.put(ts)
        self.refresh_chart()

    # Fetch -----------------------------------------------------------
    def open_fetch_dialog(self) -> None:
        if not self.api_key:
            QMessageBox.warning(self, "API Key Required", "Set your FRED API key first.")
            self.open_api_key_dialog()
            if not self.api_key:
                return
        dlg = FetchDialog(self)
        if dlg.exec() and dlg.params is not None:
            self.start_fetch(dlg.params)

    def start_fetch(self, params: FetchParams) -> Optional[FetchWorker]:
        try:
            client = FredClient(self.api_key)
        except FredApiError as e:
            QMessageBox.critical(self, "Invalid Key", str(e))
            return None
        self.append_output(f"\n{_RULE}\nFetching data for series: {params.series_id}\n{_RULE}\n")
        self.update_status("Fetching data...")
        worker = FetchWorker(client, params)
        # Bound slot on a GUI-thread QObject: delivery is queued onto the GUI thread.
        worker.fetched.connect(self._on_fetch_finished)
        worker.progress.connect(self.update_status)
        worker.finished.connect(self._forget_finished_workers)
        self._workers.append(worker)
        worker.start()
        return worker

    def _forget_finished_workers(self) -> None:
        for worker in [w for w in self._workers if w.isFinished()]:
            worker.client.close()
            self._workers.remove(worker)

    def _on_fetch_finished(self, ts: Optional[TimeSeries], error: str) -> None:
        if ts is None:
            self.append_output(f"\nError: {error}\n")
            self.update_status("Error occurred")
            QMessageBox.critical(self, "Fetch Error", f"Failed to fetch data: {error}")
            return
        self.add_series(ts)
        self.append_output("\nData fetched successfully.\n\n" + format_series_summary(ts))
        self.append_output("\nData cached for this session.\n")
        self.update_status(f"Loaded {ts.series_id}")

    # Import ----------------------------------------------------------
    def import_data(self, file_filter: str) -> None:
        start_dir = self.config.last_import_dir or ""
        path, _ = QFileDialog.getOpenFileName(self, "Import Data", start_dir, file_filter)
        if path:
            self.import_path(path)

    def import_path(self, path: str | Path) -> Optional[TimeSeries]:
        try:
            ts = import_file(path)
        except ParsingError as e:
            log.warning("Import failed for %s: %s", path, e)
            QMessageBox.warning(self, "Import", str(e))
            return None
        self.config.last_import_dir = str(Path(path).parent)
        self.add_series(ts)
        kind = Path(path).suffix.lstrip(".").upper()
        self.append_output(f"\nImported {kind}: {ts.series_id} ({ts.observation_count} rows)\n")
        return ts

    # Comparison ------------------------------------------------------
    def manage_series(self) -> None:
        dlg = ManageSeriesDialog(self.cache.all_series(), self.cache.active_ids, self)
        if not dlg.exec():
            return
        self.cache.set_active(dlg.selected_ids)
        self.refresh_chart()
        self.append_output(f"\nChart updated with {len(dlg.selected_ids)} series\n")

    def export_chart(self) -> None:
        if self.chart.model.is_empty:
            QMessageBox.information(self, "Export", "Nothing to export yet.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export Chart", "chart.png", "PNG images (*.png)")
        if not path:
            return
        try:
            out = self.chart.export_png(path)
        except OSError as e:
            QMessageBox.critical(self, "Export failed", str(e))
            return
        self.append_output(f"\nChart exported to {out}\n")

    # Store -----------------------------------------------------------
    def _require_store(self) -> bool:
        if self.store.is_available():
            return True
        QMessageBox.warning(self, "Store", self.store.status())
        return False

    def load_from_store(self) -> None:
        if not self._require_store():
            return
        ids = self.store.list_series_ids()
        if not ids:
            QMessageBox.information(self, "Store", "No series stored yet.")
            return
        dlg = StoredSeriesDialog(ids, self)
        if dlg.exec():
            self.load_ids(dlg.selected_ids())

    def load_ids(self, ids: List[str]) -> int:
        loaded = 0
        for sid in ids:
            record = self.store.get(sid)
            if record is None:
                self.append_output(f"\nNot found in store: {sid}\n")
                continue
            self.cache.put(TimeSeries.from_record(record))
            self.append_output(f"\nLoaded from store: {sid}\n")
            loaded += 1
        if loaded:
            self.refresh_chart()
        return loaded

    def save_active_series(self) -> None:
        if not self._require_store():
            return
        active = self.cache.active_series()
        if not active:
            QMessageBox.information(self, "Store", "No active series to save.")
            return
        saved = sum(1 for ts in active if self.store.save(SeriesRecord.from_time_series(ts)))
        self.append_output(f"\nSaved {saved} of {len(active)} series to the store\n")

    def show_store_status(self) -> None:
        status = self.store.status()
        self.append_output(f"\n{status}\n")
        QMessageBox.information(self, "Store Status", status)

    def clear_store(self) -> None:
        if not self._require_store():
            return
        answer = QMessageBox.question(self, "Clear Store", "Delete all stored series?")
        if answer == QMessageBox.StandardButton.Yes and self.store.clear():
            self.append_output("\nAll stored series cleared\n")

    # View / settings ---------------------------------------------------
    def toggle_dark_mode(self) -> None:
        self.config.dark_mode = not self.config.dark_mode
        self.act_dark.setChecked(self.config.dark_mode)
        self._apply_theme()
        self._persist_config()

    def toggle_console(self) -> None:
        self.config.console_visible = not self.config.console_visible
        self.console.setVisible(self.config.console_visible)

    def toggle_chart(self) -> None:
        self.config.chart_visible = not self.config.chart_visible
        self.chart.setVisible(self.config.chart_visible)

    def open_api_key_dialog(self) -> None:
        dlg = ApiKeyDialog(self, self.api_key)
        if dlg.exec():
            self.api_key = dlg.key
            self.append_output("\nAPI key updated\n")

    def _persist_config(self) -> None:
        try:
            save_config(self.config, self.config_dir)
        except OSError as e:
            log.warning("Could not save config: %s", e)

    def closeEvent(self, event):  # type: ignore[override]
        geo = self.geometry()
        self.config.window_x, self.config.window_y = geo.x(), geo.y()
        self.config.window_w, self.config.window_h = geo.width(), geo.height()
        self._persist_config()
        if self._logging is not None:
            self._logging.remove_listener(self._on_log_entry)
        for worker in list(self._workers):
            worker.wait(2000)
        super().closeEvent(event)
