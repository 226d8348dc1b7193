"""Environment-driven formatter settings and optional ``.env`` loading.

Purpose
-------
Let deployments configure the formatter through ``GELF_*`` environment
variables (optionally sourced from a nearby ``.env`` file) instead of code.

Contents
--------
* :class:`FormatterSettings` - validated, immutable formatter configuration.
* :func:`load_settings` - build settings from an environment mapping.
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` helpers used by
  the CLI.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .application.formatter import DEFAULT_CONTEXT_PREFIX, DEFAULT_MAX_LENGTH

SUPPORTED_VERSIONS = ("1.0", "1.1")

DOTENV_ENV_VAR = "GELF_USE_DOTENV"
ENV_SYSTEM_NAME = "GELF_SYSTEM_NAME"
ENV_VERSION = "GELF_VERSION"
ENV_EXTRA_PREFIX = "GELF_EXTRA_PREFIX"
ENV_CONTEXT_PREFIX = "GELF_CONTEXT_PREFIX"
ENV_MAX_LENGTH = "GELF_MAX_LENGTH"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_PATH: Path | None = None
_DOTENV_LOADED = False


@dataclass(frozen=True)
class FormatterSettings:
    """Configuration consumed by :class:`GelfMessageFormatter`."""

    system_name: str = field(default_factory=lambda: socket.gethostname())
    version: str = "1.0"
    extra_prefix: str = ""
    context_prefix: str = DEFAULT_CONTEXT_PREFIX
    max_length: int = DEFAULT_MAX_LENGTH

    def __post_init__(self) -> None:
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(f"{ENV_VERSION} must be one of {', '.join(SUPPORTED_VERSIONS)}, got {self.version!r}")
        if self.max_length <= 0:
            raise ValueError(f"{ENV_MAX_LENGTH} must be positive, got {self.max_length}")

    def replace(self, **changes: object) -> "FormatterSettings":
        """Return a copy with every non-``None`` entry of ``changes`` applied."""
        values = {
            "system_name": self.system_name,
            "version": self.version,
            "extra_prefix": self.extra_prefix,
            "context_prefix": self.context_prefix,
            "max_length": self.max_length,
        }
        values.update({key: value for key, value in changes.items() if value is not None})
        return FormatterSettings(**values)  # type: ignore[arg-type]


def _parse_max_length(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{ENV_MAX_LENGTH} must be an integer, got {raw!r}") from exc


def load_settings(environ: Mapping[str, str] | None = None) -> FormatterSettings:
    """Build :class:`FormatterSettings` from ``GELF_*`` variables.

    Unset or blank variables keep their defaults.

    Raises
    ------
    ValueError
        When ``GELF_MAX_LENGTH`` is not a positive integer or ``GELF_VERSION``
        is unsupported.

    Examples
    --------
    >>> load_settings({"GELF_SYSTEM_NAME": "api01", "GELF_MAX_LENGTH": "512"}).max_length
    512
    """
    env = os.environ if environ is None else environ
    settings: dict[str, object] = {}
    system_name = env.get(ENV_SYSTEM_NAME, "").strip()
    if system_name:
        settings["system_name"] = system_name
    version = env.get(ENV_VERSION, "").strip()
    if version:
        settings["version"] = version
    if ENV_EXTRA_PREFIX in env:
        settings["extra_prefix"] = env[ENV_EXTRA_PREFIX]
    if ENV_CONTEXT_PREFIX in env:
        settings["context_prefix"] = env[ENV_CONTEXT_PREFIX]
    max_length = env.get(ENV_MAX_LENGTH, "").strip()
    if max_length:
        settings["max_length"] = _parse_max_length(max_length)
    return FormatterSettings(**settings)  # type: ignore[arg-type]


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled.

    An explicit CLI flag wins over the ``GELF_USE_DOTENV`` toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _FALSY:
        return False
    return normalized in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    The search starts at ``search_from`` (default: the working directory) and
    walks up to the filesystem root. Subsequent calls reuse the first result.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when no file was found.
    """
    global _DOTENV_PATH, _DOTENV_LOADED
    if _DOTENV_LOADED:
        return _DOTENV_PATH
    if search_from is None:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    else:
        candidate = _search_upwards(search_from)
    if candidate is not None:
        load_dotenv(candidate, override=False)
        candidate = candidate.resolve()
    _DOTENV_PATH = candidate
    _DOTENV_LOADED = True
    return candidate


def _search_upwards(start: Path) -> Path | None:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH, _DOTENV_LOADED
    _DOTENV_PATH = None
    _DOTENV_LOADED = False


__all__ = [
    "DEFAULT_CONTEXT_PREFIX",
    "DEFAULT_MAX_LENGTH",
    "DOTENV_ENV_VAR",
    "FormatterSettings",
    "SUPPORTED_VERSIONS",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
