"""Read-only, lazily scanned view over a JSON text blob.

A ``DocumentView`` never builds a parse tree. Each query scans the view's
span of the shared text buffer from left to right and returns either a
plain string or child views that reference a sub-span of the same buffer.

Scan contract:
 - Keys are matched only at the top level of the view (object depth 1).
 - String literals are skipped as opaque tokens (escaped quotes honoured),
   so braces or brackets inside string values never affect depth.
 - Array extraction tracks ``{``/``}`` depth only; brackets nested inside a
   row are opaque. This is correct for the flat row-of-objects payloads the
   API produces and is not a general JSON reader.
 - Every scan is bounded by the view's span; an unterminated string, object
   or array is clamped to the end of the buffer.

Missing keys, wrong value kinds and truncated input degrade to ``""``,
``[]`` or an empty view. Nothing in this module raises on malformed input.
"""

from __future__ import annotations

from typing import List, Optional

__all__ = ["DocumentView"]

_WHITESPACE = " \t\r\n"
_SCALAR_STOP = ",}]" + _WHITESPACE


def _string_end(buf: str, quote: int, end: int) -> int:
    """Index of the quote closing the literal opened at ``quote`` (or ``end``)."""
    j = quote + 1
    while j < end:
        c = buf[j]
        if c == "\\":
            j += 2
            continue
        if c == '"':
            return j
        j += 1
    return end


def _skip_ws(buf: str, i: int, end: int) -> int:
    while i < end and buf[i] in _WHITESPACE:
        i += 1
    return i


def _object_end(buf: str, brace: int, end: int) -> int:
    """Exclusive end of the object opened at ``brace``; ``end`` when unterminated."""
    depth = 0
    i = brace
    while i < end:
        c = buf[i]
        if c == '"':
            i = _string_end(buf, i, end) + 1
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return end


class DocumentView:
    """Immutable window ``[start, end)`` over a text buffer."""

    __slots__ = ("_buf", "_start", "_end")

    def __init__(self, text: str, start: int = 0, end: Optional[int] = None) -> None:
        buf = text or ""
        n = len(buf)
        self._buf = buf
        self._start = max(0, min(start, n))
        self._end = n if end is None else max(self._start, min(end, n))

    @classmethod
    def parse(cls, text: str) -> "DocumentView":
        return cls(text)

    @classmethod
    def empty(cls) -> "DocumentView":
        return cls("{}")

    @property
    def text(self) -> str:
        return self._buf[self._start : self._end]

    def __len__(self) -> int:
        return self._end - self._start

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        preview = self.text[:40]
        return f"DocumentView({preview!r}{'...' if len(self) > 40 else ''})"

    # Queries ---------------------------------------------------------
    def has_key(self, key: str) -> bool:
        return self._value_start(key) >= 0

    def get_string(self, key: str) -> str:
        """Scalar value for ``key``; ``""`` when absent, null or not a scalar.

        Quoted values are returned exactly as they appear between the quotes
        (escape sequences are not decoded). Unquoted scalars (numbers,
        booleans) are returned as their raw token text.
        """
        buf, end = self._buf, self._end
        pos = self._value_start(key)
        if pos < 0 or pos >= end:
            return ""
        first = buf[pos]
        if first == '"':
            return buf[pos + 1 : _string_end(buf, pos, end)]
        if first in "{[":
            return ""
        j = pos
        while j < end and buf[j] not in _SCALAR_STOP:
            j += 1
        token = buf[pos:j]
        return "" if token == "null" else token

    def get_array(self, key: str) -> List["DocumentView"]:
        """One child view per object at depth 1 of the array under ``key``.

        Single linear pass with a running brace-depth counter. Objects are
        emitted in source order; an object left open at end of buffer is
        emitted clamped to the buffer end.
        """
        buf, end = self._buf, self._end
        pos = self._value_start(key)
        if pos < 0 or pos >= end or buf[pos] != "[":
            return []
        rows: List[DocumentView] = []
        depth = 0
        brackets = 0
        obj_start = -1
        i = pos + 1
        while i < end:
            c = buf[i]
            if c == '"':
                i = _string_end(buf, i, end) + 1
                continue
            if c == "{":
                if depth == 0:
                    obj_start = i
                depth += 1
            elif c == "}":
                if depth > 0:
                    depth -= 1
                    if depth == 0:
                        rows.append(DocumentView(buf, obj_start, i + 1))
                        obj_start = -1
            elif depth == 0 and c == "[":
                brackets += 1
            elif depth == 0 and c == "]":
                if brackets == 0:
                    return rows
                brackets -= 1
            i += 1
        if depth > 0 and obj_start >= 0:
            rows.append(DocumentView(buf, obj_start, end))
        return rows

    def get_object(self, key: str) -> "DocumentView":
        """Child view scoped to the object under ``key`` (empty view if absent)."""
        buf, end = self._buf, self._end
        pos = self._value_start(key)
        if pos < 0 or pos >= end or buf[pos] != "{":
            return DocumentView.empty()
        return DocumentView(buf, pos, _object_end(buf, pos, end))

    # Internal --------------------------------------------------------
    def _value_start(self, key: str) -> int:
        """Index of the first non-blank character after ``"key":`` or -1.

        Only keys at the top level of this view qualify; a view over a bare
        fragment without an opening brace treats depth 0 as top level.
        """
        buf, end = self._buf, self._end
        klen = len(key)
        depth = 0
        i = self._start
        while i < end:
            c = buf[i]
            if c == '"':
                close = _string_end(buf, i, end)
                if (
                    depth <= 1
                    and close < end
                    and close - i - 1 == klen
                    and buf.startswith(key, i + 1)
                ):
                    j = _skip_ws(buf, close + 1, end)
                    if j < end and buf[j] == ":":
                        return _skip_ws(buf, j + 1, end)
                i = close + 1
                continue
            if c in "{[":
                depth += 1
            elif c in "}]":
                depth -= 1
            i += 1
        return -1
