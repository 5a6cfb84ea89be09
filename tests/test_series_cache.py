import pytest

from services.series_cache import SeriesCache


def test_first_cached_series_becomes_active(make_series):
    cache = SeriesCache()
    assert cache.put(make_series("A")) is True
    assert cache.put(make_series("B")) is False
    assert cache.active_ids == ["A"]
    assert cache.ids() == ["A", "B"]


def test_refetch_replaces_wholesale(make_series):
    cache = SeriesCache()
    cache.put(make_series("A", ("1",)))
    cache.put(make_series("A", ("1", "2", "3")))
    assert len(cache) == 1
    assert cache.get("A").observation_count == 3
    assert cache.active_series()[0].observation_count == 3


def test_set_active_keeps_selection_order(make_series):
    cache = SeriesCache()
    for sid in "ABC":
        cache.put(make_series(sid))
    cache.set_active(["C", "A", "C"])
    assert cache.active_ids == ["C", "A"]
    assert [ts.series_id for ts in cache.active_series()] == ["C", "A"]


def test_set_active_rejects_unknown_and_too_many(make_series):
    cache = SeriesCache()
    for i in range(6):
        cache.put(make_series(f"S{i}"))
    with pytest.raises(ValueError):
        cache.set_active(["NOPE"])
    with pytest.raises(ValueError):
        cache.set_active([f"S{i}" for i in range(6)])
    assert cache.active_ids == ["S0"]


def test_remove_drops_from_active(make_series):
    cache = SeriesCache()
    cache.put(make_series("A"))
    cache.put(make_series("B"))
    cache.set_active(["A", "B"])
    assert cache.remove("A")
    assert not cache.remove("A")
    assert "A" not in cache
    assert cache.active_ids == ["B"]
    cache.clear()
    assert cache.active_series() == []
