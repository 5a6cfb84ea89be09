"""Application layer helpers: persisted UI configuration.

Public exports are the config dataclass and its load/save helpers.
"""

from .config_store import (  # noqa: F401
    AppConfig,
    load_config,
    save_config,
    CONFIG_VERSION,
    DEFAULT_FILENAME,
)

__all__ = [
    "AppConfig",
    "load_config",
    "save_config",
    "CONFIG_VERSION",
    "DEFAULT_FILENAME",
]
