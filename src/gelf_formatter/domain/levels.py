"""Syslog severity scale and conversions between its two representations.

Purpose
-------
GELF transports severities as numeric syslog levels while most logging
frameworks speak in lowercase names (``"error"``, ``"warning"`` ...). This
module is the single place where one representation is turned into the other.

Contents
--------
* :class:`SeverityLevel` enum with the eight syslog severities.
* :func:`to_textual` / :func:`to_numeric` validating conversions.

System Role
-----------
Used by :class:`~gelf_formatter.domain.message.GelfMessage` to validate levels
on write and by the record formatter to translate incoming record levels.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .errors import InvalidSeverity


class SeverityLevel(IntEnum):
    """Syslog severities, 0 being the most severe."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def severity(self) -> str:
        """Return the canonical lowercase name used by logging frameworks."""

        return self.name.lower()

    @classmethod
    def coerce(cls, level: Any) -> "SeverityLevel":
        """Return the member matching ``level`` in either representation.

        Examples
        --------
        >>> SeverityLevel.coerce("Error")
        <SeverityLevel.ERROR: 3>
        >>> SeverityLevel.coerce(6.9)
        <SeverityLevel.INFO: 6>
        """
        return cls(to_numeric(level))


_SEVERITY_NAMES = tuple(member.severity for member in SeverityLevel)
# Index equals syslog ordinal.


def _as_ordinal(level: Any) -> int | None:
    """Return ``level`` truncated to int when it is numeric, else ``None``."""
    if isinstance(level, bool):
        return None
    if not isinstance(level, (int, float, str)):
        return None
    try:
        return int(float(level))
    except (ValueError, OverflowError):
        return None


def to_textual(level: Any) -> str:
    """Return the canonical severity name for ``level``.

    Numeric input is truncated to an integer and must lie in ``0..7``; textual
    input is matched case-insensitively.

    Raises
    ------
    InvalidSeverity
        When ``level`` matches neither representation.

    Examples
    --------
    >>> to_textual(3)
    'error'
    >>> to_textual("WARNING")
    'warning'
    """
    ordinal = _as_ordinal(level)
    if ordinal is not None:
        if SeverityLevel.EMERGENCY <= ordinal <= SeverityLevel.DEBUG:
            return _SEVERITY_NAMES[ordinal]
    elif isinstance(level, str):
        lowered = level.lower()
        if lowered in _SEVERITY_NAMES:
            return lowered
    raise InvalidSeverity(level, target="textual")


def to_numeric(level: Any) -> int:
    """Return the syslog ordinal for ``level``.

    Examples
    --------
    >>> to_numeric("Critical")
    2
    >>> to_numeric(7)
    7
    """
    ordinal = _as_ordinal(level)
    if ordinal is not None:
        if SeverityLevel.EMERGENCY <= ordinal <= SeverityLevel.DEBUG:
            return ordinal
    elif isinstance(level, str):
        lowered = level.lower()
        if lowered in _SEVERITY_NAMES:
            return _SEVERITY_NAMES.index(lowered)
    raise InvalidSeverity(level, target="syslog")


__all__ = ["SeverityLevel", "to_numeric", "to_textual"]
