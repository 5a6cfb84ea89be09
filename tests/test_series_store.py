import sqlite3

import pytest

from db import get_existing_tables
from db.series_store import SqliteSeriesStore, StoreUnavailableError
from domain.models import SeriesRecord
from domain.time_series import TimeSeries


def _record(series_id="GDP", values=("1", "2")):
    ts = TimeSeries.from_observations(
        series_id, "Title", [(f"2020-0{i + 1}-01", v) for i, v in enumerate(values)]
    )
    return SeriesRecord.from_time_series(ts)


def test_save_and_get_round_trip():
    store = SqliteSeriesStore()
    assert store.is_available()
    assert store.save(_record())
    rec = store.get("GDP")
    assert rec is not None
    assert rec.title == "Title"
    assert rec.first_date == "2020-01-01"
    assert rec.last_date == "2020-02-01"
    assert rec.created_at is not None
    ts = TimeSeries.from_record(rec)
    assert [(o.date, o.value) for o in ts.get_all_observations()] == [
        ("2020-01-01", "1"),
        ("2020-02-01", "2"),
    ]


def test_save_is_an_upsert():
    store = SqliteSeriesStore()
    store.save(_record(values=("1",)))
    store.save(_record(values=("5", "6", "7")))
    assert store.count() == 1
    assert store.get("GDP").observation_count == 3


def test_listing_exists_delete_and_clear():
    store = SqliteSeriesStore()
    for sid in ("UNRATE", "GDP", "CPI"):
        store.save(_record(sid))
    assert store.list_series_ids() == ["CPI", "GDP", "UNRATE"]
    assert store.exists("GDP")
    assert store.delete("GDP")
    assert not store.delete("GDP")
    assert not store.exists("GDP")
    assert store.get("GDP") is None
    assert "2 series" in store.status()
    assert store.clear()
    assert store.count() == 0


def test_file_backed_store_persists(tmp_path):
    path = tmp_path / "nested" / "series.sqlite3"
    with SqliteSeriesStore(path) as store:
        store.save(_record("A"))
    with SqliteSeriesStore.open(path) as reopened:
        assert reopened.list_series_ids() == ["A"]


def test_existing_connection_is_not_closed():
    conn = sqlite3.connect(":memory:")
    store = SqliteSeriesStore(conn)
    assert "series_document" in get_existing_tables(conn)
    store.close()
    assert conn.execute("SELECT COUNT(*) FROM series_document").fetchone()[0] == 0


def test_unavailable_store_degrades(tmp_path):
    store = SqliteSeriesStore(tmp_path)  # a directory cannot be opened as a database
    assert not store.is_available()
    assert "unavailable" in store.status()
    assert store.save(_record()) is False
    assert store.get("GDP") is None
    assert store.list_series_ids() == []
    assert store.exists("GDP") is False
    assert store.count() == 0
    assert store.clear() is False
    with pytest.raises(StoreUnavailableError):
        SqliteSeriesStore.open(tmp_path)


def test_closed_store_behaves_as_unavailable():
    store = SqliteSeriesStore()
    store.close()
    assert not store.is_available()
    assert store.list_series_ids() == []
