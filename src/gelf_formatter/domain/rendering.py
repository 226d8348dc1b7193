"""Version-specific rendering of GELF field mappings.

Purpose
-------
GELF 1.1 deprecated the top-level ``facility``, ``file`` and ``line`` fields in
favour of underscore-prefixed additionals. Each protocol version therefore gets
its own renderer, selected by version tag via :func:`renderer_for`.

Contents
--------
* :class:`Gelf10Renderer` / :class:`Gelf11Renderer` rendering strategies.
* :func:`keep_value` - empty-value predicate applied to the final mapping.
* :func:`format_time` - calendar string exposed as the ``time`` field.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_DEPRECATED_IN_1_1 = ("line", "facility", "file")


def _keep_str(value: str) -> bool:
    return len(value) > 0


def _keep_float(value: float) -> bool:
    return value != 0.0


def _keep_sized(value: Any) -> bool:
    return len(value) > 0


# First matching kind decides.
_KEEP_PREDICATES: tuple[tuple[type | tuple[type, ...], Callable[[Any], bool]], ...] = (
    (bool, lambda _value: True),
    (int, lambda _value: True),
    (str, _keep_str),
    (float, _keep_float),
    ((dict, list, tuple, set, frozenset), _keep_sized),
)


def keep_value(value: Any) -> bool:
    """Return ``True`` when ``value`` survives the empty-value filter.

    Booleans and integers are always kept, so ``False`` and ``0`` survive while
    ``""``, ``None`` and empty containers are dropped.

    Examples
    --------
    >>> [keep_value(v) for v in (False, 0, "", None, [], "0", 0.0)]
    [True, True, False, False, False, True, False]
    """
    if value is None:
        return False
    for kinds, predicate in _KEEP_PREDICATES:
        if isinstance(value, kinds):
            return predicate(value)
    return bool(value)


def format_time(timestamp: float) -> str:
    """Return ``timestamp`` as a UTC calendar string with second precision.

    Timestamps outside the range :class:`datetime` can represent yield ``""``
    so the ``time`` field is dropped from the payload.

    >>> format_time(0)
    '1970-01-01 00:00:00'
    >>> format_time(1e20)
    ''
    """

    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(TIME_FORMAT)
    except (ValueError, OverflowError, OSError):
        return ""


class Gelf10Renderer:
    """Render fields as GELF 1.0 expects them: standard fields stay top-level."""

    version = "1.0"

    def render(self, fields: Mapping[str, Any], additionals: Mapping[str, Any]) -> dict[str, Any]:
        """Return the filtered flat mapping for ``fields`` plus ``additionals``."""
        message = self._standard_fields(fields)
        for key, value in additionals.items():
            message[f"_{key}"] = value
        return {key: value for key, value in message.items() if keep_value(value)}

    def _standard_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        return dict(fields)


class Gelf11Renderer(Gelf10Renderer):
    """Render fields for GELF 1.1, moving deprecated fields to additionals."""

    version = "1.1"

    def _standard_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        message = {key: value for key, value in fields.items() if key not in _DEPRECATED_IN_1_1}
        for key in _DEPRECATED_IN_1_1:
            if key in fields:
                message[f"_{key}"] = fields[key]
        return message


_RENDERERS: dict[str, Gelf10Renderer] = {
    Gelf10Renderer.version: Gelf10Renderer(),
    Gelf11Renderer.version: Gelf11Renderer(),
}


def renderer_for(version: str | None) -> Gelf10Renderer:
    """Return the renderer for ``version``; unknown tags render as GELF 1.0."""

    return _RENDERERS.get(str(version), _RENDERERS[Gelf10Renderer.version])


__all__ = [
    "Gelf10Renderer",
    "Gelf11Renderer",
    "TIME_FORMAT",
    "format_time",
    "keep_value",
    "renderer_for",
]
