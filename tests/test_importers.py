import pytest

from parsing.errors import EmptyImportError, ParsingError, UnsupportedFormatError
from parsing.importers import import_file, read_csv_observations, read_json_observations


def test_csv_import_uses_file_stem_and_first_two_columns(tmp_path):
    path = tmp_path / "UNRATE_local.csv"
    path.write_text("2020-01-01,3.5\n\n2020-02-01, 3.6 ,extra\nbroken\n2020-03-01,.\n")
    ts = import_file(path)
    assert ts.series_id == "UNRATE_local"
    assert ts.title == "Imported CSV"
    assert ts.frequency == "Imported"
    assert ts.units == "Units"
    assert [(o.date, o.value) for o in ts.get_all_observations()] == [
        ("2020-01-01", "3.5"),
        ("2020-02-01", "3.6"),
        ("2020-03-01", "."),
    ]


def test_csv_header_row_is_kept_as_an_observation(tmp_path):
    path = tmp_path / "h.csv"
    path.write_text("date,value\n2020-01-01,1\n")
    imported = read_csv_observations(path)
    assert imported.observations[0].value == "value"
    assert len(imported.observations) == 2


def test_csv_with_bom(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes("\ufeff2020-01-01,1\n".encode("utf-8"))
    assert read_csv_observations(path).observations[0].date == "2020-01-01"


def test_json_import(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(
        '{"seriesId": "MYSERIES", "observations": ['
        '{"date": "2020-01-01", "value": "10"}, {"date": "2020-02-01", "value": "11"}]}'
    )
    ts = import_file(path)
    assert ts.series_id == "MYSERIES"
    assert ts.title == "Imported JSON"
    assert ts.observation_count == 2
    assert ts.last_date == "2020-02-01"


def test_json_without_series_id_falls_back_to_stem(tmp_path):
    path = tmp_path / "fallback.json"
    path.write_text('{"observations": [{"date": "2020", "value": "1"}]}')
    assert read_json_observations(path).series_id == "fallback"


def test_empty_files_raise(tmp_path):
    csv = tmp_path / "empty.csv"
    csv.write_text("just-one-field\n")
    with pytest.raises(EmptyImportError):
        import_file(csv)
    js = tmp_path / "empty.json"
    js.write_text('{"seriesId": "X", "observations": []}')
    with pytest.raises(EmptyImportError) as exc:
        import_file(js)
    assert exc.value.context["path"].endswith("empty.json")


def test_unsupported_extension(tmp_path):
    path = tmp_path / "data.xlsx"
    path.write_text("x")
    with pytest.raises(UnsupportedFormatError):
        import_file(path)


def test_missing_file_is_a_parsing_error(tmp_path):
    with pytest.raises(ParsingError):
        import_file(tmp_path / "nope.csv")
