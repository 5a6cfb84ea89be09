"""Modal dialogs used by the main window.

 - FetchDialog: series id plus optional start/end dates.
 - ApiKeyDialog: enter or replace the API key (validated before accept).
 - ManageSeriesDialog: choose which cached series are charted (max 5).
 - StoredSeriesDialog: pick one or more ids from the persisted store.

Fetch input is validated by ``services.fred_client.build_fetch_params``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from config import settings
from domain.models import FetchParams
from domain.time_series import TimeSeries
from gui.charting import color_for_series
from services.fred_client import FredApiError, FredClient, build_fetch_params

__all__ = [
    "validate_selection",
    "FetchDialog",
    "ApiKeyDialog",
    "ManageSeriesDialog",
    "StoredSeriesDialog",
]


def validate_selection(selected: Sequence[str], limit: int = settings.MAX_ACTIVE_SERIES) -> List[str]:
    if len(selected) > limit:
        raise ValueError(f"Maximum {limit} series can be displayed at once.")
    return list(selected)


class FetchDialog(QDialog):
    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Fetch FRED Series")
        self._params: Optional[FetchParams] = None
        form = QFormLayout()
        self.series_edit = QLineEdit()
        self.series_edit.setPlaceholderText("e.g. GDP, UNRATE, CPIAUCSL")
        self.start_edit = QLineEdit()
        self.start_edit.setPlaceholderText("YYYY-MM-DD (optional)")
        self.end_edit = QLineEdit()
        self.end_edit.setPlaceholderText("YYYY-MM-DD (optional)")
        form.addRow("Series ID:", self.series_edit)
        form.addRow("Start date:", self.start_edit)
        form.addRow("End date:", self.end_edit)
        hint = QLabel(f'<a href="{settings.SERIES_BROWSE_URL}">Browse series on FRED</a>')
        hint.setOpenExternalLinks(True)
        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)  # type: ignore[attr-defined]
        buttons.rejected.connect(self.reject)  # type: ignore[attr-defined]
        lay = QVBoxLayout(self)
        lay.addLayout(form)
        lay.addWidget(hint)
        lay.addWidget(buttons)

    @property
    def params(self) -> Optional[FetchParams]:
        return self._params

    def _on_accept(self) -> None:
        try:
            self._params = build_fetch_params(
                self.series_edit.text(), self.start_edit.text(), self.end_edit.text()
            )
        except ValueError as e:
            QMessageBox.warning(self, "Invalid Input", str(e))
            return
        self.accept()


class ApiKeyDialog(QDialog):
    def __init__(self, parent: Optional[QWidget] = None, current: str = ""):
        super().__init__(parent)
        self.setWindowTitle("FRED API Key")
        self._key = ""
        self.key_edit = QLineEdit(current)
        self.key_edit.setEchoMode(QLineEdit.EchoMode.Password)
        info = QLabel(
            f'Enter your 32-character FRED API key. '
            f'<a href="{settings.API_KEY_HELP_URL}">Get a free key</a>'
        )
        info.setOpenExternalLinks(True)
        info.setWordWrap(True)
        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)  # type: ignore[attr-defined]
        buttons.rejected.connect(self.reject)  # type: ignore[attr-defined]
        lay = QVBoxLayout(self)
        lay.addWidget(info)
        lay.addWidget(self.key_edit)
        lay.addWidget(buttons)

    @property
    def key(self) -> str:
        return self._key

    def _on_accept(self) -> None:
        try:
            self._key = FredClient.validate_api_key(self.key_edit.text())
        except FredApiError as e:
            QMessageBox.critical(self, "Invalid Key", str(e))
            return
        self.accept()


class ManageSeriesDialog(QDialog):
    """Checkbox list of cached series; checked rows become the active set."""

    def __init__(
        self,
        series: Sequence[TimeSeries],
        active_ids: Sequence[str],
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Manage Comparison Series")
        self._selected: List[str] = list(active_ids)
        self.list = QListWidget()
        for idx, ts in enumerate(series):
            text = f"{ts.title or ts.series_id}\n{ts.series_id} | {ts.observation_count} observations | {ts.units}"
            item = QListWidgetItem(text)
            item.setData(Qt.ItemDataRole.UserRole, ts.series_id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            checked = ts.series_id in active_ids
            item.setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
            item.setForeground(QColor(color_for_series(idx)))
            self.list.addItem(item)
        header = QLabel(
            f"Select up to {settings.MAX_ACTIVE_SERIES} series to compare."
            if series
            else "No series cached yet. Fetch or import data first."
        )
        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Apply | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.button(QDialogButtonBox.StandardButton.Apply).clicked.connect(self._on_apply)  # type: ignore[union-attr]
        buttons.rejected.connect(self.reject)  # type: ignore[attr-defined]
        lay = QVBoxLayout(self)
        lay.addWidget(header)
        lay.addWidget(self.list)
        lay.addWidget(buttons)
        self.resize(480, 400)

    @property
    def selected_ids(self) -> List[str]:
        return list(self._selected)

    def checked_ids(self) -> List[str]:
        out: List[str] = []
        for i in range(self.list.count()):
            item = self.list.item(i)
            if item is not None and item.checkState() == Qt.CheckState.Checked:
                out.append(item.data(Qt.ItemDataRole.UserRole))
        return out

    def _on_apply(self) -> None:
        try:
            self._selected = validate_selection(self.checked_ids())
        except ValueError as e:
            QMessageBox.warning(self, "Too Many Series", str(e))
            return
        self.accept()


class StoredSeriesDialog(QDialog):
    def __init__(self, series_ids: Sequence[str], parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Load From Store")
        self.list = QListWidget()
        self.list.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.list.addItems(list(series_ids))
        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Open | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)  # type: ignore[attr-defined]
        buttons.rejected.connect(self.reject)  # type: ignore[attr-defined]
        lay = QVBoxLayout(self)
        lay.addWidget(QLabel("Select series to load:"))
        lay.addWidget(self.list)
        lay.addWidget(buttons)

    def selected_ids(self) -> List[str]:
        return [item.text() for item in self.list.selectedItems()]
