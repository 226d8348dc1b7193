"""Protocols the formatter depends on; adapters provide the implementations."""

from __future__ import annotations

from .host import HostNamePort
from .time import ClockPort

__all__ = ["ClockPort", "HostNamePort"]
