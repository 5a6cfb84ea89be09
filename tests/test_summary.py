from domain.time_series import TimeSeries
from services.summary import format_series_summary


def test_summary_lists_metadata_and_latest(make_series):
    ts = TimeSeries.from_observations(
        "GDP",
        "Gross Domestic Product",
        [(f"2020-0{i}-01", str(i)) for i in range(1, 8)],
        frequency="Monthly",
        units="Dollars",
        last_updated="2024-01-01",
    )
    text = format_series_summary(ts)
    lines = text.splitlines()
    assert lines[0] == "SERIES METADATA:"
    assert lines[1] == "-" * 60
    assert "  ID: GDP" in lines
    assert "  Title: Gross Domestic Product" in lines
    assert "  Frequency: Monthly" in lines
    assert "  Units: Dollars" in lines
    assert "  Total observations: 7" in lines
    assert "  Date range: 2020-01-01 to 2020-07-01" in lines
    idx = lines.index("  Latest 5 observations:")
    assert lines[idx + 1] == "    2020-07-01: 7"
    assert lines[idx + 5] == "    2020-03-01: 3"
    assert text.endswith("\n")


def test_summary_of_empty_series():
    text = format_series_summary(TimeSeries("EMPTY"))
    assert "  Date range: N/A to N/A" in text
    assert "Latest" not in text


def test_summary_with_fewer_than_latest(make_series):
    text = format_series_summary(make_series("A", ("1", "2")))
    assert "  Latest 2 observations:" in text
