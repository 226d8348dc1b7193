from __future__ import annotations

import socket
from datetime import datetime, timedelta, timezone

import pytest

from gelf_formatter.domain.errors import InvalidSeverity, MissingAdditional
from gelf_formatter.domain.message import GelfMessage


def test_new_message_has_sane_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(socket, "gethostname", lambda: "node-7")
    monkeypatch.setattr("time.time", lambda: 1700000000.25)

    message = GelfMessage()

    assert message.version == "1.0"
    assert message.host == "node-7"
    assert message.timestamp == 1700000000.25
    assert message.syslog_level == 1
    assert message.level == "alert"
    assert message.additionals == {}


def test_setters_are_chainable() -> None:
    message = GelfMessage()
    assert message.set_host("api01").set_short_message("hi").set_full_message("hello") is message
    assert (message.host, message.short_message, message.full_message) == ("api01", "hi", "hello")


def test_set_level_accepts_names_and_ordinals() -> None:
    message = GelfMessage().set_level("Error")
    assert message.syslog_level == 3
    assert message.level == "error"
    message.set_level(6)
    assert message.level == "info"


def test_set_level_rejects_invalid_values_and_keeps_previous_level() -> None:
    message = GelfMessage().set_level("notice")
    with pytest.raises(InvalidSeverity):
        message.set_level(8)
    assert message.syslog_level == 5


def test_set_timestamp_converts_datetime_with_microseconds() -> None:
    moment = datetime(2024, 1, 2, 3, 4, 5, 250000, tzinfo=timezone.utc)
    message = GelfMessage().set_timestamp(moment)
    assert message.timestamp == pytest.approx(1704164645.25)


def test_set_timestamp_respects_timezone_offsets() -> None:
    moment = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert GelfMessage().set_timestamp(moment).timestamp == 1704164645.0


def test_set_timestamp_coerces_numbers_and_numeric_strings() -> None:
    message = GelfMessage()
    assert message.set_timestamp(12).timestamp == 12.0
    assert message.set_timestamp("1700000000.5").timestamp == 1700000000.5


def test_set_additional_ignores_empty_keys() -> None:
    message = GelfMessage().set_additional("", "dropped").set_additional(None, "dropped")  # type: ignore[arg-type]
    assert message.additionals == {}


def test_set_additional_overwrites_and_keeps_insertion_order() -> None:
    message = GelfMessage().set_additional("a", 1).set_additional("b", 2).set_additional("a", 3)
    assert list(message.additionals.items()) == [("a", 3), ("b", 2)]
    assert message.has_additional("b")
    assert message.get_additional("a") == 3


def test_get_additional_raises_for_unknown_key() -> None:
    with pytest.raises(MissingAdditional, match="'missing'"):
        GelfMessage().get_additional("missing")


def test_additionals_property_returns_a_copy() -> None:
    message = GelfMessage().set_additional("a", 1)
    message.additionals["b"] = 2
    assert not message.has_additional("b")


def _populated(version: str) -> GelfMessage:
    return (
        GelfMessage()
        .set_version(version)
        .set_host("api01")
        .set_short_message("short")
        .set_full_message("full text")
        .set_timestamp(1700000000.5)
        .set_level("warning")
        .set_facility("web")
        .set_file("/srv/app.py")
        .set_line(42)
        .set_additional("request_id", "abc")
    )


def test_to_dict_renders_gelf_1_0_fields_in_order() -> None:
    payload = _populated("1.0").to_dict(host_name="shop.example")
    assert payload == {
        "version": "1.0",
        "host": "api01",
        "host_name": "shop.example",
        "short_message": "short",
        "full_message": "full text",
        "level": 4,
        "timestamp": 1700000000.5,
        "time": "2023-11-14 22:13:20",
        "facility": "web",
        "file": "/srv/app.py",
        "line": 42,
        "_request_id": "abc",
    }
    assert list(payload)[:3] == ["version", "host", "host_name"]


def test_to_dict_moves_deprecated_fields_for_gelf_1_1() -> None:
    payload = _populated("1.1").to_dict()
    assert payload["_file"] == "/srv/app.py"
    assert payload["_line"] == 42
    assert payload["_facility"] == "web"
    assert "file" not in payload
    assert "line" not in payload
    assert "facility" not in payload


def test_to_dict_keeps_false_and_zero_but_drops_empty_values() -> None:
    message = (
        GelfMessage()
        .set_short_message("")
        .set_line(0)
        .set_additional("flag", False)
        .set_additional("count", 0)
        .set_additional("blank", "")
        .set_additional("nothing", None)
        .set_additional("empty", [])
    )
    payload = message.to_dict()
    assert payload["line"] == 0
    assert payload["_flag"] is False
    assert payload["_count"] == 0
    assert "short_message" not in payload
    assert "_blank" not in payload
    assert "_nothing" not in payload
    assert "_empty" not in payload
    assert "host_name" not in payload


def test_to_dict_is_idempotent() -> None:
    message = _populated("1.1")
    assert message.to_dict(host_name="x") == message.to_dict(host_name="x")


@pytest.mark.parametrize("timestamp", [1e20, -1e20, 1_700_000_000_000_000.0])
def test_to_dict_drops_time_for_timestamps_outside_the_calendar(timestamp: float) -> None:
    payload = GelfMessage().set_timestamp(timestamp).to_dict()
    assert payload["timestamp"] == timestamp
    assert "time" not in payload
