"""Port supplying the originating host name of the serving context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostNamePort(Protocol):
    """Return the host name rendered into the ``host_name`` GELF field."""

    def host_name(self) -> str | None: ...


__all__ = ["HostNamePort"]
