"""Normalise arbitrary record values into JSON-friendly structures.

Purpose
-------
Log records carry whatever the caller attached: datetimes, exceptions, sets,
custom objects. Before the formatter measures and serialises them, every value
is reduced to scalars, lists and string-keyed dicts.

Contents
--------
* :class:`RecordNormalizer` - recursive normaliser with depth and item limits.

System Role
-----------
Invoked by :class:`~gelf_formatter.application.formatter.GelfMessageFormatter`
on the ``context`` and ``extra`` maps of each record.
"""

from __future__ import annotations

from collections.abc import Mapping, Set as AbstractSet
from datetime import date, datetime
from typing import Any

DEFAULT_MAX_DEPTH = 9
DEFAULT_MAX_ITEMS = 1000

_SCALARS = (str, int, float, bool)


class RecordNormalizer:
    """Recursively convert values into JSON-serialisable data.

    Parameters
    ----------
    max_depth:
        Nesting depth after which a placeholder string replaces the value.
    max_items:
        Number of entries kept per collection; the remainder is summarised
        under a ``"..."`` key.

    Examples
    --------
    >>> normalizer = RecordNormalizer(max_items=2)
    >>> normalizer.normalize({"tags": {"b"}, "ids": [1, 2, 3]})
    {'tags': ['b'], 'ids': {'0': 1, '1': 2, '...': 'Over 2 items (3 total), aborting normalization'}}
    >>> normalizer.normalize(ValueError("bad"))
    {'class': 'ValueError', 'message': 'bad'}
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH, max_items: int = DEFAULT_MAX_ITEMS) -> None:
        self._max_depth = max_depth
        self._max_items = max_items

    def normalize(self, value: Any, depth: int = 0) -> Any:
        """Return ``value`` reduced to scalars, lists and string-keyed dicts."""
        if value is None or isinstance(value, _SCALARS):
            return value
        if depth > self._max_depth:
            return f"Over {self._max_depth} levels deep, aborting normalization"
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, BaseException):
            return self._normalize_exception(value)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, Mapping):
            return self._normalize_items(list(value.items()), depth)
        if isinstance(value, AbstractSet):
            return self._normalize_sequence(sorted(value, key=repr), depth)
        if isinstance(value, (list, tuple)):
            return self._normalize_sequence(list(value), depth)
        return f"[object] ({type(value).__qualname__}: {value})"

    def _normalize_sequence(self, values: list[Any], depth: int) -> Any:
        if len(values) > self._max_items:
            return self._normalize_items(list(enumerate(values)), depth)
        return [self.normalize(item, depth + 1) for item in values]

    def _normalize_items(self, items: list[tuple[Any, Any]], depth: int) -> dict[str, Any]:
        normalized: dict[str, Any] = {}
        for count, (key, item) in enumerate(items):
            if count >= self._max_items:
                normalized["..."] = f"Over {self._max_items} items ({len(items)} total), aborting normalization"
                break
            normalized[str(key)] = self.normalize(item, depth + 1)
        return normalized

    def _normalize_exception(self, exc: BaseException) -> dict[str, Any]:
        data: dict[str, Any] = {
            "class": type(exc).__qualname__,
            "message": str(exc),
        }
        traceback = exc.__traceback__
        if traceback is not None:
            while traceback.tb_next is not None:
                traceback = traceback.tb_next
            data["file"] = f"{traceback.tb_frame.f_code.co_filename}:{traceback.tb_lineno}"
        return data


__all__ = ["DEFAULT_MAX_DEPTH", "DEFAULT_MAX_ITEMS", "RecordNormalizer"]
