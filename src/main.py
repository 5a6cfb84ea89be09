"""CLI entry point for fetching, importing, storing and exporting FRED series."""

from __future__ import annotations
import argparse
import json
import logging
import sys

from config import settings
from core.http_client import HttpError
from db.series_store import SqliteSeriesStore, StoreUnavailableError
from domain.models import SeriesRecord
from domain.time_series import TimeSeries
from parsing.errors import ParsingError
from parsing.importers import import_file
from services.fred_client import FredApiError, FredClient, api_key_from_env, build_fetch_params
from services.summary import format_series_summary


class CliError(RuntimeError):
    pass


def _open_store(args: argparse.Namespace) -> SqliteSeriesStore:
    return SqliteSeriesStore.open(args.db or settings.default_db_path())


def _save(ts: TimeSeries, args: argparse.Namespace) -> None:
    with _open_store(args) as store:
        if store.save(SeriesRecord.from_time_series(ts)):
            print(f"Saved {ts.series_id} to {store.location}")


def cmd_fetch(args: argparse.Namespace) -> None:
    try:
        params = build_fetch_params(args.series, args.start or "", args.end or "")
    except ValueError as e:
        raise CliError(str(e)) from e
    with FredClient(args.api_key or api_key_from_env()) as client:
        ts = client.fetch_series(params)
    print(format_series_summary(ts, latest=args.latest), end="")
    if args.save:
        _save(ts, args)


def cmd_import(args: argparse.Namespace) -> None:
    ts = import_file(args.path)
    print(format_series_summary(ts, latest=args.latest), end="")
    if args.save:
        _save(ts, args)


def cmd_store(args: argparse.Namespace) -> None:
    with _open_store(args) as store:
        if args.action == "list":
            listing = []
            for sid in store.list_series_ids():
                rec = store.get(sid)
                if rec is None:
                    continue
                listing.append(
                    {
                        "series_id": rec.series_id,
                        "title": rec.title,
                        "observations": rec.observation_count,
                        "first_date": rec.first_date,
                        "last_date": rec.last_date,
                    }
                )
            print(json.dumps(listing, indent=2, ensure_ascii=False))
        elif args.action == "status":
            print(store.status())
        elif args.action == "clear":
            store.clear()
            print("All stored series cleared")
        elif args.action == "delete":
            for sid in args.ids:
                print(f"{'Deleted' if store.delete(sid) else 'Not found'}: {sid}")


def cmd_export_png(args: argparse.Namespace) -> None:
    from gui.charting import ChartModel, ChartProjection
    from gui.charting.backends import MatplotlibChartBackend

    series = []
    with _open_store(args) as store:
        for sid in args.series:
            rec = store.get(sid)
            if rec is None:
                raise CliError(f"Series not found in store: {sid}")
            series.append(TimeSeries.from_record(rec))
    model = ChartModel(series)
    frame = ChartProjection().project(model, args.width, args.height)
    out = MatplotlibChartBackend().render_png(frame, args.out, dark=args.dark)
    print(f"Chart exported to {out}")


def cmd_gui(args: argparse.Namespace) -> None:  # pragma: no cover - runtime
    from gui import launcher

    code = launcher.main(api_key=args.api_key, db_path=args.db)
    if code:
        raise SystemExit(code)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fredcharts")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Fetch a series from the FRED API")
    fetch.add_argument("series", help="Series ID (e.g. GDP, UNRATE)")
    fetch.add_argument("--start", help="Observation start date YYYY-MM-DD")
    fetch.add_argument("--end", help="Observation end date YYYY-MM-DD")
    fetch.add_argument("--api-key", help=f"API key (default: ${settings.FRED_API_KEY_ENV})")
    fetch.add_argument("--save", action="store_true", help="Persist the series to the store")
    fetch.add_argument("--db", help="SQLite store path")
    fetch.add_argument("--latest", type=int, default=settings.LATEST_PREVIEW_COUNT)
    fetch.set_defaults(func=cmd_fetch)

    imp = sub.add_parser("import", help="Import a CSV or JSON data file")
    imp.add_argument("path", help="Path to a .csv or .json file")
    imp.add_argument("--save", action="store_true", help="Persist the series to the store")
    imp.add_argument("--db", help="SQLite store path")
    imp.add_argument("--latest", type=int, default=settings.LATEST_PREVIEW_COUNT)
    imp.set_defaults(func=cmd_import)

    store = sub.add_parser("store", help="Inspect or modify the persisted store")
    store.add_argument("action", choices=["list", "status", "clear", "delete"])
    store.add_argument("ids", nargs="*", help="Series IDs (for delete)")
    store.add_argument("--db", help="SQLite store path")
    store.set_defaults(func=cmd_store)

    export = sub.add_parser("export-png", help="Render stored series to a PNG chart")
    export.add_argument("series", nargs="+", help="Stored series IDs (max 5)")
    export.add_argument("--out", required=True, help="Output PNG path")
    export.add_argument("--db", help="SQLite store path")
    export.add_argument("--width", type=int, default=1000)
    export.add_argument("--height", type=int, default=600)
    export.add_argument("--dark", action="store_true", help="Use the dark palette")
    export.set_defaults(func=cmd_export_png)

    gui = sub.add_parser("gui", help="Launch the desktop app")
    gui.add_argument("--api-key", help=f"API key (default: ${settings.FRED_API_KEY_ENV})")
    gui.add_argument("--db", help="SQLite store path")
    gui.set_defaults(func=cmd_gui)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except (CliError, HttpError, FredApiError, ParsingError, StoreUnavailableError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
