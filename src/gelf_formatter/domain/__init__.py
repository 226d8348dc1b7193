"""Domain entities and value objects for GELF message construction."""

from __future__ import annotations

from .errors import InvalidSeverity, MissingAdditional
from .levels import SeverityLevel, to_numeric, to_textual
from .message import DEFAULT_VERSION, GelfMessage
from .rendering import Gelf10Renderer, Gelf11Renderer, keep_value, renderer_for

__all__ = [
    "DEFAULT_VERSION",
    "Gelf10Renderer",
    "Gelf11Renderer",
    "GelfMessage",
    "InvalidSeverity",
    "MissingAdditional",
    "SeverityLevel",
    "keep_value",
    "renderer_for",
    "to_numeric",
    "to_textual",
]
