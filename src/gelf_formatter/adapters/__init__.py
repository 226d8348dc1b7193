"""Concrete adapters for the formatter ports.

The :mod:`logging` bridge lives in :mod:`gelf_formatter.adapters.stdlib` and is
imported from there so that loading the clock and host adapters does not pull
in the application layer.
"""

from __future__ import annotations

from .clock import SystemClock
from .host import DEFAULT_HOST_NAME, EnvironmentHostName, StaticHostName

__all__ = ["DEFAULT_HOST_NAME", "EnvironmentHostName", "StaticHostName", "SystemClock"]
