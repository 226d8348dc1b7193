"""Use case turning a generic log record into a single GELF JSON line.

Purpose
-------
Map the loosely typed record handed over by a logging pipeline onto a
:class:`~gelf_formatter.domain.message.GelfMessage`, keep the payload within
the configured length budget and serialise it.

Contents
--------
* :class:`GelfMessageFormatter` - stateless formatter configured once.
* :data:`FALLBACK_MESSAGE` - text substituted for incomplete records.

System Role
-----------
The only application-layer use case. Adapters (stdlib bridge, CLI) call
:meth:`GelfMessageFormatter.format`; the domain layer owns validation and
rendering.

Alignment Notes
---------------
Extra and context fields follow the same policy: non-scalar values are
JSON-encoded, and the first field exceeding ``max_length`` is truncated and
ends processing of the remaining fields of that map.
"""

from __future__ import annotations

import json
import logging
import math
import socket
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from gelf_formatter.domain import DEFAULT_VERSION, GelfMessage, SeverityLevel

from .normalizer import RecordNormalizer
from .ports import ClockPort, HostNamePort

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "The record should at least contain datetime, message and level keys"
FALLBACK_LEVEL = int(SeverityLevel.WARNING)
SHORT_MESSAGE_LENGTH = 20
METADATA_PADDING = 200
DEFAULT_MAX_LENGTH = 32766
DEFAULT_CONTEXT_PREFIX = "ctxt_"

_SCALARS = (str, int, float, bool)


def to_json(data: Any) -> str:
    """Serialise ``data`` as compact JSON keeping non-ASCII text readable."""

    return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=str)


def _as_text(value: Any) -> str:
    """Return ``value`` the way it is measured against the length budget."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def _representable(seconds: float) -> bool:
    """Return whether ``seconds`` is an epoch value :class:`datetime` can hold."""
    if not math.isfinite(seconds):
        return False
    try:
        datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return False
    return True


class GelfMessageFormatter:
    """Format log records as newline-terminated GELF JSON.

    Parameters
    ----------
    system_name:
        Value of the GELF ``host`` field; defaults to the local hostname.
    version:
        GELF protocol version rendered into each message.
    extra_prefix / context_prefix:
        Prepended to the keys of ``extra`` / ``context`` entries before they
        become additional fields.
    max_length:
        Length budget for the full message and each additional field.
    clock:
        Supplies the timestamp for records without ``datetime``.
    host_name:
        Supplies the ``host_name`` side value.
    normalizer:
        Reduces ``context``/``extra`` values to JSON-friendly data.

    Concrete clock and host adapters are wired by
    :func:`gelf_formatter.composition.create_formatter`.

    Examples
    --------
    >>> import json
    >>> from datetime import datetime, timezone
    >>> class Clock:
    ...     def now(self):
    ...         return datetime(2024, 1, 2, tzinfo=timezone.utc)
    >>> class Host:
    ...     def host_name(self):
    ...         return None
    >>> formatter = GelfMessageFormatter("api01", clock=Clock(), host_name=Host())
    >>> payload = json.loads(formatter.format({"message": "boom", "level": "error", "channel": "web"}))
    >>> payload["host"], payload["level"], payload["facility"], payload["short_message"]
    ('api01', 3, 'web', 'boom')
    """

    def __init__(
        self,
        system_name: str | None = None,
        version: str = DEFAULT_VERSION,
        extra_prefix: str | None = None,
        context_prefix: str = DEFAULT_CONTEXT_PREFIX,
        max_length: int | None = None,
        *,
        clock: ClockPort,
        host_name: HostNamePort,
        normalizer: RecordNormalizer | None = None,
    ) -> None:
        self._system_name = system_name or socket.gethostname()
        self._version = version
        self._extra_prefix = extra_prefix or ""
        self._context_prefix = context_prefix or ""
        self._max_length = DEFAULT_MAX_LENGTH if max_length is None else max_length
        self._clock = clock
        self._host_name = host_name
        self._normalizer = normalizer or RecordNormalizer()

    @property
    def system_name(self) -> str:
        return self._system_name

    @property
    def version(self) -> str:
        return self._version

    @property
    def extra_prefix(self) -> str:
        return self._extra_prefix

    @property
    def context_prefix(self) -> str:
        return self._context_prefix

    @property
    def max_length(self) -> int:
        return self._max_length

    def format(self, record: Mapping[str, Any]) -> str:
        """Return ``record`` as one GELF JSON line terminated by ``"\\n"``.

        Raises
        ------
        InvalidSeverity
            When the record level maps to no syslog severity.
        """
        message = self.build_message(record)
        return f"{to_json(message.to_dict(host_name=self._host_name.host_name()))}\n"

    def format_batch(self, records: Iterable[Mapping[str, Any]]) -> str:
        """Return the concatenated GELF lines of ``records``."""
        return "".join(self.format(record) for record in records)

    def build_message(self, record: Mapping[str, Any]) -> GelfMessage:
        """Populate a fresh :class:`GelfMessage` from ``record``."""
        data = self._normalize_record(record)
        text = str(data["message"])
        context: dict[str, Any] = data["context"]

        message = (
            GelfMessage()
            .set_timestamp(data["datetime"])
            .set_full_message(text)
            .set_host(self._system_name)
            .set_level(data["level"])
            .set_version(self._version)
        )

        if context.get("short_message") is not None:
            message.set_short_message(context.pop("short_message"))
        else:
            message.set_short_message(text[:SHORT_MESSAGE_LENGTH])

        if context.get("line") is not None:
            message.set_line(context.pop("line"))

        if context.get("file") is not None:
            message.set_file(str(context.pop("file")))

        # message length + system name length + padding for metadata
        estimated = METADATA_PADDING + len(text) + len(self._system_name)
        if estimated > self._max_length:
            logger.debug("Truncating full message of %d characters to %d", len(text), self._max_length)
            message.set_full_message(text[: self._max_length])

        if data.get("channel") is not None:
            message.set_facility(data["channel"])

        self._add_fields(message, self._extra_prefix, data["extra"])
        self._add_fields(message, self._context_prefix, context)
        return message

    def _normalize_record(self, record: Mapping[str, Any]) -> dict[str, Any]:
        data = dict(record)
        data["datetime"] = self._coerce_datetime(data.get("datetime"))
        if data.get("message") is None or data.get("level") is None:
            logger.warning("Incomplete log record, substituting fallback message (keys: %s)", sorted(map(str, record)))
            data["message"] = FALLBACK_MESSAGE
            data["level"] = FALLBACK_LEVEL
        data["context"] = self._normalize_map(data.get("context"))
        data["extra"] = self._normalize_map(data.get("extra"))
        return data

    def _coerce_datetime(self, value: Any) -> datetime | float:
        if value is None:
            return self._clock.now()
        if isinstance(value, datetime):
            return value
        if isinstance(value, (int, float, str)) and not isinstance(value, bool):
            try:
                seconds = float(value)
            except (ValueError, OverflowError):
                seconds = None
            if seconds is not None and _representable(seconds):
                return seconds
        if isinstance(value, str):
            text = value.strip()
            # fromisoformat only learned the "Z" suffix in Python 3.11
            if text[-1:] in ("Z", "z"):
                text = f"{text[:-1]}+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                pass
        logger.warning("Unusable record datetime %r, using the current time", value)
        return self._clock.now()

    def _normalize_map(self, values: Any) -> dict[str, Any]:
        if not values:
            return {}
        if not isinstance(values, Mapping):
            return {"0": self._normalizer.normalize(values)}
        return {str(key): self._normalizer.normalize(value) for key, value in values.items()}

    def _add_fields(self, message: GelfMessage, prefix: str, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            if value is not None and not isinstance(value, _SCALARS):
                value = to_json(value)
            name = f"{prefix}{key}"
            text = _as_text(value)
            if len(name) + len(text) > self._max_length:
                logger.debug("Field %s exceeds %d characters, truncating and skipping the rest", name, self._max_length)
                message.set_additional(name, text[: self._max_length])
                break
            message.set_additional(name, value)


__all__ = [
    "DEFAULT_CONTEXT_PREFIX",
    "DEFAULT_MAX_LENGTH",
    "FALLBACK_LEVEL",
    "FALLBACK_MESSAGE",
    "GelfMessageFormatter",
    "to_json",
]
