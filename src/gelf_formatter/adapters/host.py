"""Host-name providers for the ``host_name`` GELF field.

Web servers following the CGI convention expose the requested host as
``HTTP_HOST``; command-line processes have no such value and report a fixed
fallback instead.
"""

from __future__ import annotations

import os
from typing import Mapping

from gelf_formatter.application.ports.host import HostNamePort

DEFAULT_HOST_NAME = "cli.localhost"
HOST_HEADER_VAR = "HTTP_HOST"


class EnvironmentHostName(HostNamePort):
    """Read the request host from ``HTTP_HOST``, falling back to a constant.

    Examples
    --------
    >>> EnvironmentHostName(environ={"HTTP_HOST": "shop.example"}).host_name()
    'shop.example'
    >>> EnvironmentHostName(environ={}).host_name()
    'cli.localhost'
    """

    def __init__(self, *, fallback: str = DEFAULT_HOST_NAME, environ: Mapping[str, str] | None = None) -> None:
        self._fallback = fallback
        self._environ = environ

    def host_name(self) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(HOST_HEADER_VAR) or self._fallback


class StaticHostName(HostNamePort):
    """Always report the same host name."""

    def __init__(self, value: str | None) -> None:
        self._value = value

    def host_name(self) -> str | None:
        return self._value


__all__ = ["DEFAULT_HOST_NAME", "EnvironmentHostName", "HOST_HEADER_VAR", "StaticHostName"]
