from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from gelf_formatter import cli as cli_module
from gelf_formatter import config as formatter_config
from gelf_formatter.config import FormatterSettings, load_settings


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> None:
    """Reset shared dotenv state around each test."""

    formatter_config._reset_dotenv_state_for_testing()
    yield
    formatter_config._reset_dotenv_state_for_testing()


def test_load_settings_reads_gelf_variables() -> None:
    settings = load_settings(
        {
            "GELF_SYSTEM_NAME": "api01",
            "GELF_VERSION": "1.1",
            "GELF_EXTRA_PREFIX": "x_",
            "GELF_CONTEXT_PREFIX": "",
            "GELF_MAX_LENGTH": " 1024 ",
        }
    )
    assert settings == FormatterSettings(system_name="api01", version="1.1", extra_prefix="x_", context_prefix="", max_length=1024)


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("socket.gethostname", lambda: "node-1")
    settings = load_settings({})
    assert settings.system_name == "node-1"
    assert settings.version == "1.0"
    assert settings.context_prefix == "ctxt_"
    assert settings.extra_prefix == ""
    assert settings.max_length == 32766


@pytest.mark.parametrize(
    "environ, error_match",
    [
        ({"GELF_MAX_LENGTH": "lots"}, "must be an integer"),
        ({"GELF_MAX_LENGTH": "0"}, "must be positive"),
        ({"GELF_VERSION": "2.0"}, "GELF_VERSION must be one of"),
    ],
)
def test_load_settings_rejects_invalid_values(environ: dict[str, str], error_match: str) -> None:
    with pytest.raises(ValueError, match=error_match):
        load_settings(environ)


def test_replace_ignores_none_overrides() -> None:
    settings = FormatterSettings(system_name="a")
    assert settings.replace(system_name=None, max_length=5) == FormatterSettings(system_name="a", max_length=5)


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (True, None, True),
        (False, "1", False),
        (None, "on", True),
        (None, "off", False),
        (None, None, False),
        (None, "maybe", False),
    ],
)
def test_should_use_dotenv(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert formatter_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values without overriding call arguments."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("GELF_SYSTEM_NAME=dotenv-host\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("GELF_SYSTEM_NAME", raising=False)

    loaded = formatter_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["GELF_SYSTEM_NAME"] == "dotenv-host"

    os.environ.pop("GELF_SYSTEM_NAME", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    (tmp_path / ".env").write_text("GELF_SYSTEM_NAME=dotenv-host\n")
    monkeypatch.setenv("GELF_SYSTEM_NAME", "real-host")

    result = formatter_config.enable_dotenv(search_from=tmp_path)

    assert result == (tmp_path / ".env").resolve()
    assert os.environ["GELF_SYSTEM_NAME"] == "real-host"


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()
    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(formatter_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(formatter_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {formatter_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []
