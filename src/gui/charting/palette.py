"""Chart palette: ordinal series colors plus light/dark surface roles.

Series colors are assigned by position in the active-series list, cycling
through ``SERIES_COLORS``. The same position always yields the same color,
so reordering the active list reorders the colors.

Exposed roles:
 - background
 - card
 - text.primary / text.secondary
 - grid.line
 - axis.line
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

SERIES_COLORS: Tuple[str, ...] = (
    "#2196F3",  # blue
    "#F44336",  # red
    "#4CAF50",  # green
    "#FF9800",  # orange
    "#9C27B0",  # purple
)

LIGHT_ROLES: Dict[str, str] = {
    "background": "#FAFAFA",
    "card": "#FFFFFF",
    "text.primary": "#212121",
    "text.secondary": "#757575",
    "grid.line": "#E0E0E0",
    "axis.line": "#000000",
}

DARK_ROLES: Dict[str, str] = {
    "background": "#1E1E1E",
    "card": "#2D2D2D",
    "text.primary": "#DCDCDC",
    "text.secondary": "#9E9E9E",
    "grid.line": "#464646",
    "axis.line": "#DCDCDC",
}


def color_for_series(index: int) -> str:
    if index < 0:
        index = 0
    return SERIES_COLORS[index % len(SERIES_COLORS)]


@dataclass
class ChartPalette:
    """Role lookup for the current theme."""

    dark: bool = False
    _cache: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._rebuild()

    def set_dark(self, dark: bool) -> None:
        if dark != self.dark:
            self.dark = dark
            self._rebuild()

    def role(self, key: str, default: str | None = None) -> str | None:
        return self._cache.get(key, default)

    def _rebuild(self) -> None:
        self._cache = dict(DARK_ROLES if self.dark else LIGHT_ROLES)


__all__ = ["SERIES_COLORS", "LIGHT_ROLES", "DARK_ROLES", "ChartPalette", "color_for_series"]
