"""Format structured log records as GELF (Graylog Extended Log Format) lines.

The public surface is intentionally small: :func:`create_formatter` returns a
:class:`GelfMessageFormatter` that turns record mappings into JSON lines,
:class:`GelfLogFormatter` plugs the same behaviour into :mod:`logging`, and
:class:`GelfMessage` plus the severity helpers are available for callers
building messages by hand.
"""

from __future__ import annotations

from .adapters.stdlib import GelfLogFormatter
from .application.formatter import FALLBACK_MESSAGE, GelfMessageFormatter
from .composition import create_formatter, formatter_from_settings
from .config import FormatterSettings, load_settings
from .domain import GelfMessage, InvalidSeverity, MissingAdditional, SeverityLevel, to_numeric, to_textual

__all__ = [
    "FALLBACK_MESSAGE",
    "FormatterSettings",
    "GelfLogFormatter",
    "GelfMessage",
    "GelfMessageFormatter",
    "InvalidSeverity",
    "MissingAdditional",
    "SeverityLevel",
    "create_formatter",
    "formatter_from_settings",
    "load_settings",
    "to_numeric",
    "to_textual",
]
