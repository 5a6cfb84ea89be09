"""Filesystem utility helpers."""

from __future__ import annotations
import os
from pathlib import Path


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def ensure_parent(path: str | Path) -> Path:
    p = Path(path)
    if str(p.parent) not in ("", "."):
        ensure_dir(str(p.parent))
    return p


def read_text(path: str | Path, encoding: str = "utf-8-sig") -> str:
    # utf-8-sig also strips a BOM left by spreadsheet tools
    with open(path, "r", encoding=encoding) as fh:
        return fh.read()


def with_suffix(path: str | Path, suffix: str) -> Path:
    """``path`` with ``suffix`` appended unless it already ends with it."""
    p = Path(path)
    if p.suffix.lower() != suffix.lower():
        p = p.with_name(p.name + suffix)
    return p
