"""Structured errors raised while importing user data files."""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for import related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class EmptyImportError(ParsingError):
    """Raised when a file yields no observations."""


class UnsupportedFormatError(ParsingError):
    """Raised for a file extension no importer handles."""
