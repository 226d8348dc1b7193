"""Domain errors raised by the severity mapper and GELF message accessors."""

from __future__ import annotations

from typing import Any


class InvalidSeverity(ValueError):
    """Raised when a value maps to neither a syslog ordinal nor a severity name."""

    def __init__(self, level: Any, target: str = "syslog") -> None:
        self.level = level
        self.target = target
        super().__init__(f"Cannot convert log level {level!r} to {target}-style")


class MissingAdditional(LookupError):
    """Raised when reading an additional field that was never set."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Additional key {key!r} is not defined")


__all__ = ["InvalidSeverity", "MissingAdditional"]
