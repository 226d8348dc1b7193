"""Mutable GELF message assembled for a single log record.

Purpose
-------
Collect the fields of one log entry through validating fluent setters and
render them into the flat, filtered mapping that is serialised onto the wire.

Contents
--------
* :class:`GelfMessage` - builder/value object with accessors and
  :meth:`GelfMessage.to_dict`.
* :data:`DEFAULT_VERSION` - GELF version used when none is configured.

System Role
-----------
Domain value produced by the record formatter; it owns no I/O. The
``host_name`` side value is passed in by the caller rather than read from the
environment so rendering stays deterministic.
"""

from __future__ import annotations

import math
import socket
import time
from datetime import datetime
from typing import Any

from .errors import MissingAdditional
from .levels import SeverityLevel, to_numeric, to_textual
from .rendering import format_time, renderer_for

DEFAULT_VERSION = "1.0"


def _epoch_seconds(value: datetime) -> float:
    """Return ``value`` as whole epoch seconds plus its microsecond fraction."""
    seconds = math.floor(value.timestamp())
    return seconds + value.microsecond / 1_000_000


class GelfMessage:
    """One GELF log entry.

    Every setter returns the message itself so calls can be chained::

        GelfMessage().set_host("api01").set_level("error").set_short_message("boom")

    Attributes
    ----------
    version:
        GELF protocol version, ``"1.0"`` unless overridden.
    host:
        Emitting host, defaulting to :func:`socket.gethostname`.
    timestamp:
        Fractional epoch seconds, defaulting to the construction time.
    level:
        Canonical severity name; :attr:`syslog_level` holds the ordinal.
    """

    def __init__(self) -> None:
        self._version: str = DEFAULT_VERSION
        self._host: str | None = socket.gethostname()
        self._short_message: str | None = None
        self._full_message: str | None = None
        self._timestamp: float = time.time()
        self._level: int = int(SeverityLevel.ALERT)
        self._facility: str | None = None
        self._file: str | None = None
        self._line: Any = None
        self._additionals: dict[str, Any] = {}

    @property
    def version(self) -> str:
        return self._version

    @property
    def host(self) -> str | None:
        return self._host

    @property
    def short_message(self) -> str | None:
        return self._short_message

    @property
    def full_message(self) -> str | None:
        return self._full_message

    @property
    def timestamp(self) -> float:
        return self._timestamp

    @property
    def level(self) -> str:
        """Return the severity as its canonical lowercase name."""
        return to_textual(self._level)

    @property
    def syslog_level(self) -> int:
        """Return the severity as a numeric syslog level."""
        return to_numeric(self._level)

    @property
    def facility(self) -> str | None:
        return self._facility

    @property
    def file(self) -> str | None:
        return self._file

    @property
    def line(self) -> Any:
        return self._line

    @property
    def additionals(self) -> dict[str, Any]:
        """Return a copy of all additional fields in insertion order."""
        return dict(self._additionals)

    def get_additional(self, key: str) -> Any:
        """Return the additional field ``key``.

        Raises
        ------
        MissingAdditional
            When ``key`` was never set.
        """
        try:
            return self._additionals[key]
        except KeyError:
            raise MissingAdditional(key) from None

    def has_additional(self, key: str) -> bool:
        return key in self._additionals

    def set_version(self, version: str) -> "GelfMessage":
        self._version = version
        return self

    def set_host(self, host: str | None) -> "GelfMessage":
        self._host = host
        return self

    def set_short_message(self, short_message: str | None) -> "GelfMessage":
        self._short_message = short_message
        return self

    def set_full_message(self, full_message: str | None) -> "GelfMessage":
        self._full_message = full_message
        return self

    def set_timestamp(self, timestamp: float | int | str | datetime) -> "GelfMessage":
        """Store ``timestamp`` as fractional epoch seconds.

        ``datetime`` values are converted to whole seconds plus microseconds;
        anything else is coerced with :class:`float`.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> GelfMessage().set_timestamp(datetime(2024, 1, 2, 3, 4, 5, 250000, tzinfo=timezone.utc)).timestamp
        1704164645.25
        """
        if isinstance(timestamp, datetime):
            self._timestamp = _epoch_seconds(timestamp)
        else:
            self._timestamp = float(timestamp)
        return self

    def set_level(self, level: int | str) -> "GelfMessage":
        """Store ``level`` after validating it.

        Raises
        ------
        InvalidSeverity
            When ``level`` is neither a syslog ordinal nor a severity name; the
            previously stored level is kept.
        """
        self._level = to_numeric(level)
        return self

    def set_facility(self, facility: str | None) -> "GelfMessage":
        self._facility = facility
        return self

    def set_file(self, file: str | None) -> "GelfMessage":
        self._file = file
        return self

    def set_line(self, line: Any) -> "GelfMessage":
        self._line = line
        return self

    def set_additional(self, key: str, value: Any) -> "GelfMessage":
        """Insert or overwrite an additional field; falsy keys are ignored."""
        if not key:
            return self
        self._additionals[key] = value
        return self

    def to_dict(self, host_name: str | None = None) -> dict[str, Any]:
        """Render the message into the flat GELF mapping.

        Parameters
        ----------
        host_name:
            Originating host name of the serving context; omitted from the
            output when ``None``.

        Examples
        --------
        >>> message = GelfMessage().set_host("api01").set_timestamp(0).set_version("1.1").set_line(0)
        >>> message.set_short_message("hi").set_additional("ok", False).to_dict()
        {'version': '1.1', 'host': 'api01', 'short_message': 'hi', 'level': 1, 'time': '1970-01-01 00:00:00', '_line': 0, '_ok': False}
        """
        fields = {
            "version": self._version,
            "host": self._host,
            "host_name": host_name,
            "short_message": self._short_message,
            "full_message": self._full_message,
            "level": self.syslog_level,
            "timestamp": self._timestamp,
            "time": format_time(self._timestamp),
            "facility": self._facility,
            "file": self._file,
            "line": self._line,
        }
        return renderer_for(self._version).render(fields, self._additionals)


__all__ = ["DEFAULT_VERSION", "GelfMessage"]
