"""User data file importers (CSV and JSON).

Both formats produce an ``ImportedSeries`` which ``import_file`` turns into
a ``TimeSeries`` through the explicit-observation constructor, so imported
data flows through exactly the same chart path as fetched data.

CSV: one observation per line, ``date,value[,...]``. Extra columns are
ignored, lines with fewer than two fields are skipped and a header row is
kept as-is (its value is non-numeric and never plotted).

JSON: ``{"seriesId": "...", "observations": [{"date": ..., "value": ...}]}``
read through ``DocumentView``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict

from core.filesystem import read_text
from domain.models import ImportedSeries, Observation
from domain.time_series import TimeSeries
from .document_view import DocumentView
from .errors import EmptyImportError, ParsingError, UnsupportedFormatError

__all__ = [
    "CSV_TITLE",
    "JSON_TITLE",
    "read_csv_observations",
    "read_json_observations",
    "import_file",
]

log = logging.getLogger(__name__)

CSV_TITLE = "Imported CSV"
JSON_TITLE = "Imported JSON"


def _read(path: Path) -> str:
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ParsingError(f"Read error: {e}", context={"path": str(path)}) from e


def read_csv_observations(path: str | Path) -> ImportedSeries:
    p = Path(path)
    obs = []
    for line in _read(p).splitlines():
        parts = line.split(",")
        if len(parts) < 2:
            continue
        obs.append(Observation(parts[0].strip(), parts[1].strip()))
    return ImportedSeries(series_id=p.stem, source=CSV_TITLE, observations=obs)


def read_json_observations(path: str | Path) -> ImportedSeries:
    p = Path(path)
    root = DocumentView.parse(_read(p))
    obs = [
        Observation(row.get_string("date"), row.get_string("value"))
        for row in root.get_array("observations")
    ]
    return ImportedSeries(
        series_id=root.get_string("seriesId") or p.stem,
        source=JSON_TITLE,
        observations=obs,
    )


_READERS: Dict[str, Callable[[str | Path], ImportedSeries]] = {
    ".csv": read_csv_observations,
    ".json": read_json_observations,
}


def import_file(path: str | Path) -> TimeSeries:
    """Read a CSV or JSON data file into a ``TimeSeries``.

    Raises ``UnsupportedFormatError`` for other extensions and
    ``EmptyImportError`` when the file holds no observations.
    """
    p = Path(path)
    reader = _READERS.get(p.suffix.lower())
    if reader is None:
        raise UnsupportedFormatError(
            f"Unsupported file type: {p.suffix or '(none)'}", context={"path": str(p)}
        )
    imported = reader(p)
    if not imported.observations:
        raise EmptyImportError("No data found", context={"path": str(p)})
    log.info(
        "Imported %s from %s (%d rows)", imported.series_id, p.name, len(imported.observations)
    )
    return TimeSeries.from_observations(imported.series_id, imported.source, imported.observations)
