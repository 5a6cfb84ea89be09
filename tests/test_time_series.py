from domain.models import Observation, SeriesRecord
from domain.time_series import TimeSeries
from parsing.document_view import DocumentView


def test_from_documents_reads_first_metadata_row(fred_payloads):
    meta, obs = fred_payloads
    ts = TimeSeries.from_documents(DocumentView.parse(meta), DocumentView.parse(obs))
    assert ts.series_id == "GDP"
    assert ts.title == "Gross Domestic Product"
    assert ts.frequency == "Quarterly"
    assert ts.units == "Billions of Dollars"
    assert ts.last_updated == "2024-03-28 07:51:02-05"
    assert ts.observation_count == 4
    assert ts.first_date == "2023-01-01"
    assert ts.last_date == "2023-10-01"
    # missing-data marker is kept verbatim at this layer
    assert ts.observation_at(2) == Observation("2023-07-01", ".")


def test_empty_metadata_array_falls_back_to_empty_fields(fred_payloads):
    _, obs = fred_payloads
    ts = TimeSeries.from_documents(
        DocumentView.parse('{"seriess":[]}'), DocumentView.parse(obs), series_id="GDP"
    )
    assert ts.series_id == "GDP"
    assert ts.title == ""
    assert ts.units == ""
    assert ts.observation_count == 4


def test_latest_observations_reverse_chronological():
    ts = TimeSeries.from_observations(
        "X", "t", [("2020-01-01", "1"), ("2020-02-01", "2"), ("2020-03-01", "3")]
    )
    latest = ts.get_latest_observations(5)
    assert [o.date for o in latest] == ["2020-03-01", "2020-02-01", "2020-01-01"]
    assert [o.date for o in ts.get_latest_observations(2)] == ["2020-03-01", "2020-02-01"]
    assert ts.get_latest_observations(0) == []
    # underlying order untouched
    assert ts.get_all_observations()[0].date == "2020-01-01"


def test_adapter_round_trip_preserves_order_and_values():
    pairs = [("2021-01-01", "3.5"), ("2020-01-01", "."), ("2022-01-01", "-1")]
    ts = TimeSeries.from_observations("IMP", "Imported CSV", pairs)
    assert [(o.date, o.value) for o in ts.get_all_observations()] == pairs
    assert ts.frequency == "Imported"
    assert ts.units == "Units"
    assert ts.last_updated == ""


def test_returned_list_is_a_copy():
    ts = TimeSeries.from_observations("X", "t", [("d", "1")])
    obs = ts.get_all_observations()
    obs.clear()
    assert len(ts) == 1


def test_empty_series_has_no_date_range():
    ts = TimeSeries("EMPTY")
    assert ts.observation_count == 0
    assert ts.first_date is None
    assert ts.last_date is None
    assert ts.get_latest_observations(5) == []


def test_record_round_trip():
    ts = TimeSeries.from_observations("R", "Title", [("2020-01-01", "1"), ("2020-02-01", "2")])
    record = SeriesRecord.from_time_series(ts, created_at=1.0)
    assert record.first_date == "2020-01-01"
    assert record.last_date == "2020-02-01"
    assert record.observations_as_dicts()[1] == {"date": "2020-02-01", "value": "2"}
    back = TimeSeries.from_record(record)
    assert back.get_all_observations() == ts.get_all_observations()
    assert back.title == "Title"
    assert back.frequency == "Imported"
