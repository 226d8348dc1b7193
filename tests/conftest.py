from __future__ import annotations

from datetime import datetime, timezone

import pytest

from gelf_formatter.adapters.host import StaticHostName
from gelf_formatter.application.formatter import GelfMessageFormatter
from gelf_formatter.application.ports.time import ClockPort

FROZEN_NOW = datetime(2025, 9, 23, 12, 30, 15, 500000, tzinfo=timezone.utc)


class FrozenClock(ClockPort):
    def __init__(self, now: datetime = FROZEN_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def make_formatter(frozen_clock: FrozenClock):
    """Return a factory building formatters with deterministic collaborators."""

    def _make(**kwargs: object) -> GelfMessageFormatter:
        kwargs.setdefault("system_name", "api01")
        kwargs.setdefault("clock", frozen_clock)
        kwargs.setdefault("host_name", StaticHostName("shop.example"))
        return GelfMessageFormatter(**kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def formatter(make_formatter) -> GelfMessageFormatter:
    return make_formatter()
