"""Unit tests for environment-driven settings and the CLI wiring."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ejudge_scraper import cli
from ejudge_scraper.config import DEFAULT_URL, Settings
from ejudge_scraper.domain.exceptions import ConfigurationError, OperationCancelledError, StageError

ENV_VARS = [
    "EJUDGE_URL",
    "EJUDGE_USERNAME",
    "EJUDGE_PASSWORD",
    "EJUDGE_CONTEST_ID",
    "EJUDGE_TIMEOUT",
    "EJUDGE_OUTPUT_DIR",
    "EJUDGE_RENDER_PDF",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(tmp_path):
    settings = Settings.from_env(str(tmp_path / "missing.env"))

    assert settings.base_url == DEFAULT_URL
    assert settings.contest_id is None
    assert settings.timeout == 5.0
    assert settings.output_dir == Path("out")
    assert settings.render_pdf is True
    assert settings.log_level == "INFO"


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("EJUDGE_URL", "http://judge/team.cgi")
    monkeypatch.setenv("EJUDGE_USERNAME", "team")
    monkeypatch.setenv("EJUDGE_PASSWORD", "pw")
    monkeypatch.setenv("EJUDGE_CONTEST_ID", "10521")
    monkeypatch.setenv("EJUDGE_TIMEOUT", "2.5")
    monkeypatch.setenv("EJUDGE_OUTPUT_DIR", "results")
    monkeypatch.setenv("EJUDGE_RENDER_PDF", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env(str(tmp_path / "missing.env"))

    assert settings == Settings(
        base_url="http://judge/team.cgi",
        username="team",
        password="pw",
        contest_id=10521,
        timeout=2.5,
        output_dir=Path("results"),
        render_pdf=False,
        log_level="DEBUG",
    )


def test_from_env_reads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("EJUDGE_USERNAME=dotenv-team\nEJUDGE_CONTEST_ID=7\n")

    settings = Settings.from_env(str(env_file))

    assert settings.username == "dotenv-team"
    assert settings.contest_id == 7


@pytest.mark.parametrize(
    "name, value",
    [("EJUDGE_CONTEST_ID", "abc"), ("EJUDGE_TIMEOUT", "soon"), ("EJUDGE_RENDER_PDF", "maybe")],
)
def test_invalid_values_raise(monkeypatch, tmp_path, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        Settings.from_env(str(tmp_path / "missing.env"))


def test_override_ignores_none():
    settings = Settings(username="team", contest_id=1)

    updated = settings.override(username=None, contest_id=2, timeout=None)

    assert updated.username == "team"
    assert updated.contest_id == 2
    assert updated.timeout == 5.0


@pytest.mark.parametrize(
    "settings",
    [
        Settings(contest_id=1),
        Settings(username="team"),
        Settings(username="team", contest_id=1, timeout=0),
    ],
)
def test_validate_rejects_incomplete_settings(settings):
    with pytest.raises(ConfigurationError):
        settings.validate()


def test_cli_flags_override_environment(monkeypatch):
    monkeypatch.setenv("EJUDGE_USERNAME", "env-team")
    monkeypatch.setenv("EJUDGE_CONTEST_ID", "1")
    run = AsyncMock(return_value=0)

    with patch.object(cli, "run", run), patch.object(cli, "configure_logging"):
        code = cli.main(["--contest-id", "10523", "--no-pdf", "-o", "dump", "--deadline", "30"])

    assert code == 0
    settings, deadline = run.await_args.args
    assert settings.username == "env-team"
    assert settings.contest_id == 10523
    assert settings.render_pdf is False
    assert settings.output_dir == Path("dump")
    assert deadline == 30


def test_cli_missing_credentials_fails():
    with patch.object(cli, "configure_logging"):
        assert cli.main([]) == cli.EXIT_FAILURE


@pytest.mark.asyncio
async def test_cli_run_maps_cancellation_to_exit_status():
    service = MagicMock()
    service.scrape_and_export = AsyncMock(
        side_effect=StageError("submissions", "http://h/src", OperationCancelledError("http://h/src"))
    )
    service.close = AsyncMock()

    with patch.object(cli, "create_scrape_service", return_value=service):
        code = await cli.run(Settings(username="team", contest_id=1))

    assert code == cli.EXIT_CANCELLED
    service.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_cli_run_returns_zero_on_success(tmp_path):
    service = MagicMock()
    service.scrape_and_export = AsyncMock(return_value=tmp_path)
    service.close = AsyncMock()

    with patch.object(cli, "create_scrape_service", return_value=service):
        code = await cli.run(Settings(username="team", contest_id=1, output_dir=tmp_path))

    assert code == 0
    service.scrape_and_export.assert_awaited_once()


@pytest.mark.asyncio
async def test_cli_run_maps_late_cancellation_to_exit_status():
    service = MagicMock()
    service.scrape_and_export = AsyncMock(
        side_effect=OperationCancelledError(reason="interrupted by SIGTERM")
    )
    service.close = AsyncMock()

    with patch.object(cli, "create_scrape_service", return_value=service):
        code = await cli.run(Settings(username="team", contest_id=1))

    assert code == cli.EXIT_CANCELLED
