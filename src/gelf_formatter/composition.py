"""Composition root wiring the formatter use case to its concrete adapters.

Purpose
-------
Keep the application layer free of adapter and configuration imports: the
formatter receives its clock and host-name ports, and this module supplies
the production implementations.

Contents
--------
* :func:`create_formatter` - formatter with system clock and ``HTTP_HOST`` lookup.
* :func:`formatter_from_settings` - same, configured from :class:`FormatterSettings`.
"""

from __future__ import annotations

from typing import Any

from .adapters.clock import SystemClock
from .adapters.host import EnvironmentHostName
from .application.formatter import GelfMessageFormatter
from .application.ports import ClockPort, HostNamePort
from .config import FormatterSettings


def create_formatter(
    *args: Any,
    clock: ClockPort | None = None,
    host_name: HostNamePort | None = None,
    **kwargs: Any,
) -> GelfMessageFormatter:
    """Return a :class:`GelfMessageFormatter` with default adapters filled in.

    Positional and keyword arguments are passed through unchanged; ``clock``
    and ``host_name`` default to :class:`SystemClock` and
    :class:`EnvironmentHostName`.

    Examples
    --------
    >>> create_formatter("api01", version="1.1").version
    '1.1'
    """
    return GelfMessageFormatter(
        *args,
        clock=clock or SystemClock(),
        host_name=host_name or EnvironmentHostName(),
        **kwargs,
    )


def formatter_from_settings(settings: FormatterSettings, **collaborators: Any) -> GelfMessageFormatter:
    """Build a formatter from validated :class:`FormatterSettings`."""
    return create_formatter(
        system_name=settings.system_name,
        version=settings.version,
        extra_prefix=settings.extra_prefix,
        context_prefix=settings.context_prefix,
        max_length=settings.max_length,
        **collaborators,
    )


__all__ = ["create_formatter", "formatter_from_settings"]
