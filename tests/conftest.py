# Minimal conftest providing a fallback 'qtbot' fixture if pytest-qt is not installed.
# Widget tests still exercise basic lifecycle operations. If pytest-qt is
# installed, its fixture wins.

import sys
import os
import contextlib
import pytest

# Headless Qt for every widget test, with or without pytest-qt.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv)  # type: ignore  # noqa: F841
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        yield Bot()
        for w in widgets:
            w.close()


META_JSON = (
    '{"realtime_start":"2024-01-01","seriess":[{"id":"GDP","realtime_start":"2024-01-01",'
    '"title":"Gross Domestic Product","frequency":"Quarterly","units":"Billions of Dollars",'
    '"last_updated":"2024-03-28 07:51:02-05","notes":"A {braced} note"}]}'
)

OBS_JSON = (
    '{"count":4,"observations":['
    '{"realtime_start":"2024-01-01","date":"2023-01-01","value":"26813.601"},'
    '{"realtime_start":"2024-01-01","date":"2023-04-01","value":"27063.012"},'
    '{"realtime_start":"2024-01-01","date":"2023-07-01","value":"."},'
    '{"realtime_start":"2024-01-01","date":"2023-10-01","value":"27956.998"}]}'
)


@pytest.fixture
def fred_payloads():
    return META_JSON, OBS_JSON


@pytest.fixture
def make_series():
    from domain.time_series import TimeSeries

    def _make(series_id="S", values=("1.0", "2.0"), start_year=2020, title=""):
        obs = [(f"{start_year + i}-01-01", v) for i, v in enumerate(values)]
        return TimeSeries.from_observations(series_id, title, obs)

    return _make
