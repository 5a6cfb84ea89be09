"""GUI-side services.

Currently only the log capture that feeds the console panel. Instances are
created by the launcher and handed to the window explicitly.
"""

from .logging_service import LoggingService, LogEntry  # noqa: F401

__all__ = [
    "LoggingService",
    "LogEntry",
]
