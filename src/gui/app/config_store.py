"""Application configuration persistence.

Stores and loads lightweight UI state: theme, panel visibility, window
geometry, last import directory and the persisted-store location. The
config object is handed explicitly to the main window; nothing here is a
process-wide singleton.

Design principles:
- Pure logic (no direct Qt import) so it can be unit-tested headless.
- Explicit schema with version field to enable future migrations.
- Graceful fallback: corrupt or incompatible files produce defaults instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = ["AppConfig", "load_config", "save_config", "CONFIG_VERSION", "DEFAULT_FILENAME"]

CONFIG_VERSION = 1  # Increment when structure changes

DEFAULT_FILENAME = ".fredcharts.json"

log = logging.getLogger(__name__)


@dataclass(slots=True)
class AppConfig:
    """Serializable application state configuration.

    Attributes
    ----------
    version: Schema version for migration handling.
    dark_mode: Dark theme enabled.
    console_visible, chart_visible: Split-pane visibility flags.
    window_x, window_y, window_w, window_h: Last window geometry (None if unknown).
    last_import_dir: Directory of the most recent CSV/JSON import.
    db_path: SQLite file used as the persisted series store (None = default).
    """

    version: int = CONFIG_VERSION
    dark_mode: bool = False
    console_visible: bool = True
    chart_visible: bool = True
    window_x: Optional[int] = None
    window_y: Optional[int] = None
    window_w: Optional[int] = None
    window_h: Optional[int] = None
    last_import_dir: Optional[str] = None
    db_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            dark_mode=bool(data.get("dark_mode", False)),
            console_visible=bool(data.get("console_visible", True)),
            chart_visible=bool(data.get("chart_visible", True)),
            window_x=data.get("window_x"),
            window_y=data.get("window_y"),
            window_w=data.get("window_w"),
            window_h=data.get("window_h"),
            last_import_dir=data.get("last_import_dir"),
            db_path=data.get("db_path"),
        )

    def is_geometry_complete(self) -> bool:
        return (
            self.window_x is not None
            and self.window_y is not None
            and self.window_w is not None
            and self.window_h is not None
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.home()
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> AppConfig:
    """Load application config from directory.

    Parameters
    ----------
    base_dir: The directory containing the config file (defaults to the user's home).
    """
    path = _resolve_path(base_dir)
    if not path.exists():
        return AppConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        cfg = AppConfig.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        log.warning("Ignoring unreadable config %s: %s", path, e)
        return AppConfig()
    if cfg.version != CONFIG_VERSION:
        # Reset to defaults but keep the theme and store location.
        return AppConfig(dark_mode=cfg.dark_mode, db_path=cfg.db_path)
    return cfg


def save_config(cfg: AppConfig, base_dir: str | Path | None = None) -> Path:
    """Persist application config to directory.

    Returns the path written for convenience.
    """
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
