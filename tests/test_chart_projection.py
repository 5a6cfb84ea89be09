import math
import sys

import pytest

from gui.charting import ChartModel, ChartProjection, DevicePoint
from gui.charting.projection import project_x, project_y
from gui.charting.types import EMPTY_FRAME_TITLE

W, H, M = 400, 300, 60  # plot area 280 x 180


def _project(model):
    proj = ChartProjection()
    frame = proj.project(model, W, H, M)
    return proj, frame


def test_endpoints_map_to_plot_corners(make_series):
    _, frame = _project(ChartModel([make_series("A", ("1", "2"))]))
    pts = frame.series[0].points
    assert pts[0] == DevicePoint(60.0, 240.0)  # min value at the bottom
    assert pts[1] == DevicePoint(340.0, 60.0)  # max value at the top
    assert frame.series[0].connect


def test_single_point_is_centered_and_deterministic(make_series):
    model = ChartModel([make_series("A", ("42.5",))])
    _, f1 = _project(model)
    _, f2 = _project(model)
    (pt,) = f1.series[0].points
    assert pt == DevicePoint(200.0, 150.0)
    assert f2.series[0].points == f1.series[0].points
    assert f1.degenerate
    assert not f1.series[0].connect


def test_flat_series_lands_at_mid_height(make_series):
    _, frame = _project(ChartModel([make_series("A", ("3", "3", "3"))]))
    assert {p.y for p in frame.series[0].points} == {150.0}


def test_skipped_values_do_not_leave_gaps_in_x(make_series):
    _, frame = _project(ChartModel([make_series("A", ("1", ".", "3"))]))
    assert [p.x for p in frame.series[0].points] == [60.0, 340.0]


def test_project_helpers_handle_degenerate_input():
    assert project_x(0, 1, W, M) == 200.0
    assert project_y(7.0, 7.0, 7.0, H, M) == 150.0


def test_empty_model_produces_empty_frame():
    proj, frame = _project(ChartModel())
    assert frame.empty
    assert frame.title == EMPTY_FRAME_TITLE
    assert frame.series == ()
    assert proj.find_nearest((200, 150)) is None


def test_find_nearest_without_projection_is_no_hit():
    assert ChartProjection().find_nearest(DevicePoint(0, 0)) is None


def test_find_nearest_reports_original_observation(make_series):
    proj, _ = _project(ChartModel([make_series("A", ("1", ".", "3"))]))
    hit = proj.find_nearest((338, 62))
    assert hit is not None
    assert (hit.series_index, hit.point_index) == (0, 1)
    assert hit.date == "2022-01-01"
    assert hit.value == "3"
    assert hit.tooltip() == "A: 3 (2022-01-01)"
    assert hit.distance == pytest.approx(2 ** 1.5)


def test_find_nearest_threshold_is_strict(make_series):
    proj, _ = _project(ChartModel([make_series("A", ("1", "2"))]))
    assert proj.find_nearest((75, 240), threshold=15) is None
    assert proj.find_nearest((74.5, 240), threshold=15) is not None


def test_find_nearest_picks_closest_across_series(make_series):
    model = ChartModel([make_series("A", ("1", "2")), make_series("B", ("2", "1"))])
    proj, _ = _project(model)
    # A: (60,240) (340,60); B: (60,60) (340,240)
    hit = proj.find_nearest((62, 62))
    assert hit.series_id == "B"
    assert (hit.series_index, hit.point_index) == (1, 0)


def test_equal_distances_resolve_to_first_series(make_series):
    model = ChartModel([make_series("A", ("1", "2")), make_series("B", ("1", "2"))])
    proj, _ = _project(model)
    hit = proj.find_nearest((63, 240))
    assert hit.series_index == 0
    assert hit.series_id == "A"


def test_equal_distances_within_series_resolve_to_first_point(make_series):
    # three points: x = 60, 200, 340 at the same height
    proj, _ = _project(ChartModel([make_series("A", ("1", "1", "1"))]))
    # midway between the first two points is > 15 px away, use a tighter set-up
    narrow = ChartProjection()
    narrow.project(ChartModel([make_series("A", ("1", "1", "1"))]), 140, 200, 60)
    # plot width 20: points at x = 60, 70, 80 and y = 100
    hit = narrow.find_nearest((65, 100))
    assert hit.point_index == 0
    assert proj.find_nearest((130, 150)) is None


def test_stale_cache_is_never_queried(make_series):
    model = ChartModel([make_series("A", ("1", "2"))])
    proj, _ = _project(model)
    assert proj.find_nearest((60, 240)) is not None
    model.set_series([make_series("B", ("5", "6"))])
    assert proj.is_stale()
    assert proj.frame is None
    assert proj.find_nearest((60, 240)) is None
    proj.project(model, W, H, M)
    assert proj.find_nearest((60, 240)).series_id == "B"


def test_y_ticks_top_to_bottom(make_series):
    _, frame = _project(ChartModel([make_series("A", ("0", "10"))]))
    assert len(frame.y_ticks) == 6
    assert frame.y_ticks[0].position == 60.0
    assert frame.y_ticks[0].label == "10.00"
    assert frame.y_ticks[-1].position == 240.0
    assert frame.y_ticks[-1].label == "0.00"


def test_x_ticks_sample_first_series(make_series):
    values = [str(i) for i in range(16)]
    _, frame = _project(ChartModel([make_series("A", values)]))
    assert len(frame.x_ticks) == 8
    assert frame.x_ticks[0].label == "2020-01-01"
    assert frame.x_ticks[1].label == "2022-01-01"


def test_legend_entries_follow_active_order(make_series):
    model = ChartModel([make_series("B"), make_series("A" * 25)])
    _, frame = _project(model)
    assert [e.series_id for e in frame.legend] == ["B", "A" * 25]
    assert frame.legend[1].label == "A" * 17 + "..."


def test_tiny_viewport_is_not_drawable_but_safe(make_series):
    proj = ChartProjection()
    frame = proj.project(ChartModel([make_series("A", ("1", "2"))]), 100, 100, 60)
    assert not frame.drawable
    assert len(frame.series[0].points) == 2


def test_extreme_magnitudes_stay_finite(make_series):
    _, frame = _project(ChartModel([make_series("A", ("1e308", "-1e308"))]))
    assert frame.series[0].points == (DevicePoint(60.0, 60.0), DevicePoint(340.0, 240.0))
    assert all(math.isfinite(float(t.label)) for t in frame.y_ticks)


def test_flat_series_at_huge_value_lands_mid_height(make_series):
    for text in ("1e300", "-1e300", repr(sys.float_info.max)):
        _, frame = _project(ChartModel([make_series("A", (text, text))]))
        ys = [p.y for p in frame.series[0].points]
        assert all(math.isfinite(y) for y in ys)
        assert all(60.0 <= y <= 240.0 for y in ys)
    _, frame = _project(ChartModel([make_series("A", ("1e300",))]))
    assert frame.series[0].points[0].y == pytest.approx(150.0)
