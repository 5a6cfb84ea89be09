import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtCore import Qt  # noqa: E402

from gui.dialogs import (  # noqa: E402
    ApiKeyDialog,
    FetchDialog,
    ManageSeriesDialog,
    StoredSeriesDialog,
    validate_selection,
)


def test_validate_selection_limit():
    assert validate_selection(["A", "B"]) == ["A", "B"]
    with pytest.raises(ValueError, match="Maximum 5 series"):
        validate_selection(list("ABCDEF"))


def test_fetch_dialog_builds_params(qtbot):
    dlg = FetchDialog()
    qtbot.addWidget(dlg)
    dlg.series_edit.setText(" UNRATE ")
    dlg.start_edit.setText("2020-01-01")
    dlg._on_accept()
    assert dlg.params.series_id == "UNRATE"
    assert dlg.params.start_date.year == 2020


def test_api_key_dialog_accepts_valid_key(qtbot):
    dlg = ApiKeyDialog(current="d" * 32)
    qtbot.addWidget(dlg)
    dlg._on_accept()
    assert dlg.key == "d" * 32


def test_manage_dialog_checks_active_series(qtbot, make_series):
    series = [make_series("A"), make_series("B"), make_series("C")]
    dlg = ManageSeriesDialog(series, ["B"])
    qtbot.addWidget(dlg)
    assert dlg.checked_ids() == ["B"]
    dlg.list.item(2).setCheckState(Qt.CheckState.Checked)
    dlg._on_apply()
    assert dlg.selected_ids == ["B", "C"]


def test_stored_dialog_selection(qtbot):
    dlg = StoredSeriesDialog(["A", "B", "C"])
    qtbot.addWidget(dlg)
    dlg.list.item(0).setSelected(True)
    dlg.list.item(2).setSelected(True)
    assert sorted(dlg.selected_ids()) == ["A", "C"]
