from __future__ import annotations

import pytest

from gelf_formatter.adapters.clock import SystemClock
from gelf_formatter.adapters.host import DEFAULT_HOST_NAME, EnvironmentHostName, StaticHostName
from gelf_formatter.application.ports import ClockPort, HostNamePort


def test_environment_host_name_reads_http_host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HTTP_HOST", "shop.example")
    assert EnvironmentHostName().host_name() == "shop.example"


def test_environment_host_name_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HTTP_HOST", raising=False)
    assert EnvironmentHostName().host_name() == DEFAULT_HOST_NAME
    assert EnvironmentHostName(fallback="worker").host_name() == "worker"


def test_environment_host_name_accepts_injected_mapping() -> None:
    assert EnvironmentHostName(environ={"HTTP_HOST": ""}, fallback="cli").host_name() == "cli"


def test_adapters_satisfy_ports() -> None:
    assert isinstance(StaticHostName("x"), HostNamePort)
    assert isinstance(EnvironmentHostName(), HostNamePort)
    assert isinstance(SystemClock(), ClockPort)


def test_system_clock_is_timezone_aware() -> None:
    assert SystemClock().now().utcoffset() is not None
