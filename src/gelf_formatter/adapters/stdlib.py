"""Bridge between :mod:`logging` and the GELF record formatter.

Purpose
-------
Allow any stdlib handler to emit GELF by installing :class:`GelfLogFormatter`
as its formatter.

Contents
--------
* :class:`GelfLogFormatter` - :class:`logging.Formatter` subclass.
* :func:`severity_for_levelno` - stdlib level number to severity name.

System Role
-----------
Outer adapter: converts :class:`logging.LogRecord` objects into the generic
record mapping consumed by
:class:`~gelf_formatter.application.formatter.GelfMessageFormatter`.
"""

from __future__ import annotations

import logging
from typing import Any

from gelf_formatter.application.formatter import GelfMessageFormatter
from gelf_formatter.domain.levels import SeverityLevel

from .clock import SystemClock
from .host import EnvironmentHostName

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

_LEVEL_THRESHOLDS = (
    (logging.CRITICAL, SeverityLevel.CRITICAL),
    (logging.ERROR, SeverityLevel.ERROR),
    (logging.WARNING, SeverityLevel.WARNING),
    (logging.INFO, SeverityLevel.INFO),
)


def severity_for_levelno(levelno: int) -> str:
    """Return the severity name for a stdlib level number.

    Examples
    --------
    >>> severity_for_levelno(logging.ERROR), severity_for_levelno(25), severity_for_levelno(5)
    ('error', 'info', 'debug')
    """
    for threshold, level in _LEVEL_THRESHOLDS:
        if levelno >= threshold:
            return level.severity
    return SeverityLevel.DEBUG.severity


class GelfLogFormatter(logging.Formatter):
    """Render :class:`logging.LogRecord` objects as GELF JSON.

    Attributes passed through ``logger.info(..., extra={...})`` become context
    fields; ``short_message``, ``line`` and ``file`` keep their special
    meaning. The remaining source details (function, process, thread) are sent
    as extra fields.

    Parameters
    ----------
    formatter:
        Configured :class:`GelfMessageFormatter`; a default one is created when
        omitted.
    """

    def __init__(self, formatter: GelfMessageFormatter | None = None) -> None:
        super().__init__()
        self._formatter = formatter or GelfMessageFormatter(clock=SystemClock(), host_name=EnvironmentHostName())

    def format(self, record: logging.LogRecord) -> str:
        """Return ``record`` as GELF JSON without a trailing newline."""
        return self._formatter.format(self.to_record(record)).rstrip("\n")

    def to_record(self, record: logging.LogRecord) -> dict[str, Any]:
        """Return the generic record mapping for ``record``."""
        context: dict[str, Any] = {
            key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        context.setdefault("line", record.lineno)
        context.setdefault("file", record.pathname)
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            context["exception"] = record.exc_text
        if record.stack_info:
            context["stack"] = self.formatStack(record.stack_info)
        return {
            "message": record.getMessage(),
            "level": severity_for_levelno(record.levelno),
            "datetime": record.created,
            "channel": record.name,
            "context": context,
            "extra": {
                "function": record.funcName,
                "process": record.process,
                "thread": record.threadName,
            },
        }


__all__ = ["GelfLogFormatter", "severity_for_levelno"]
