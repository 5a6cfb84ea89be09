"""Plain-text series report shown in the console panel and by the CLI."""

from __future__ import annotations

from config import settings
from domain.time_series import TimeSeries

__all__ = ["format_series_summary"]

_RULE = "-" * 60


def format_series_summary(ts: TimeSeries, latest: int = settings.LATEST_PREVIEW_COUNT) -> str:
    lines = [
        "SERIES METADATA:",
        _RULE,
        f"  ID: {ts.series_id}",
        f"  Title: {ts.title}",
        f"  Frequency: {ts.frequency}",
        f"  Units: {ts.units}",
        f"  Last Updated: {ts.last_updated}",
        "",
        "OBSERVATIONS:",
        _RULE,
        f"  Total observations: {ts.observation_count}",
        f"  Date range: {ts.first_date or 'N/A'} to {ts.last_date or 'N/A'}",
    ]
    recent = ts.get_latest_observations(latest)
    if recent:
        lines.append("")
        lines.append(f"  Latest {len(recent)} observations:")
        lines.extend(f"    {o.date}: {o.value}" for o in recent)
    return "\n".join(lines) + "\n"
