import pytest

pytest.importorskip("matplotlib")

import main  # noqa: E402
from gui.charting import ChartModel, ChartProjection  # noqa: E402
from gui.charting.backends import MatplotlibChartBackend  # noqa: E402

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_render_png_enforces_suffix(tmp_path, make_series):
    model = ChartModel([make_series("A", ("1", "3", "2")), make_series("B", ("2", "2", "5"))])
    frame = ChartProjection().project(model, 800, 500)
    out = MatplotlibChartBackend().render_png(frame, tmp_path / "out" / "chart", dark=True)
    assert out.name == "chart.png"
    assert out.read_bytes().startswith(PNG_MAGIC)


def test_render_empty_frame(tmp_path):
    frame = ChartProjection().project(ChartModel(), 400, 300)
    out = MatplotlibChartBackend().render_png(frame, tmp_path / "empty.png")
    assert out.read_bytes().startswith(PNG_MAGIC)


def test_figure_matches_frame_size(make_series):
    frame = ChartProjection().project(ChartModel([make_series("A")]), 640, 480)
    fig = MatplotlibChartBackend().create_figure(frame, dpi=80)
    w, h = fig.get_size_inches()
    assert (round(w * 80), round(h * 80)) == (640, 480)


def test_cli_export_png(tmp_path, capsys):
    db = str(tmp_path / "s.sqlite3")
    data = tmp_path / "GDPX.csv"
    data.write_text("2020-01-01,1\n2020-04-01,4\n2020-07-01,.\n")
    assert main.main(["import", str(data), "--save", "--db", db]) == 0
    out = tmp_path / "gdp.png"
    assert main.main(["export-png", "GDPX", "--out", str(out), "--db", db, "--width", "500", "--height", "300"]) == 0
    assert out.read_bytes().startswith(PNG_MAGIC)
    assert main.main(["export-png", "MISSING", "--out", str(out), "--db", db]) == 1
    assert "Series not found in store: MISSING" in capsys.readouterr().err
