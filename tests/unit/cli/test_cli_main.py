"""Tests for the realmgen command line."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from realmgen.cli.main import app
from realmgen.config.settings import API_KEY_ENV_VAR
from realmgen.pipeline.driver import PipelineResult
from realmgen.pipeline.exceptions import RetriesExhaustedError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def fake_driver(result=None, error=None) -> MagicMock:
    driver_cls = MagicMock()

    async def run():
        if error is not None:
            raise error
        return result

    driver_cls.return_value.run.side_effect = run
    return driver_cls


def test_missing_api_key_exits_with_diagnostic(monkeypatch):
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

    with patch("realmgen.cli.main.PipelineDriver") as driver_cls:
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "API Key Missing" in result.stdout
    assert API_KEY_ENV_VAR in result.stdout
    driver_cls.assert_not_called()


def test_api_key_is_read_from_dotenv(tmp_path, monkeypatch):
    # setenv first so monkeypatch removes the key load_dotenv writes
    monkeypatch.setenv(API_KEY_ENV_VAR, "placeholder")
    monkeypatch.delenv(API_KEY_ENV_VAR)
    (tmp_path / ".env").write_text(f"{API_KEY_ENV_VAR}=from-dotenv\n", encoding="utf-8")
    driver_cls = fake_driver(PipelineResult(Path("realm-project"), 0, False))

    with (
        patch("realmgen.cli.main.GeminiTextClient") as client_cls,
        patch("realmgen.cli.main.PipelineDriver", driver_cls),
    ):
        result = runner.invoke(app, [])

    assert result.exit_code == 0, result.stdout
    assert client_cls.call_args.kwargs["api_key"] == "from-dotenv"


def test_default_run_uses_no_directory(api_key):
    driver_cls = fake_driver(PipelineResult(Path("realm-project"), 0, False))

    with patch("realmgen.cli.main.GeminiTextClient"), patch("realmgen.cli.main.PipelineDriver", driver_cls):
        result = runner.invoke(app, [])

    assert result.exit_code == 0, result.stdout
    assert driver_cls.call_args.kwargs["project_dir"] is None
    assert "Preview finished for realm-project" in result.stdout


@pytest.mark.parametrize("flag", ["-d", "--directory"])
def test_directory_flag_is_passed_to_driver(api_key, flag):
    driver_cls = fake_driver(PipelineResult(Path("my-docs"), 0, True))

    with patch("realmgen.cli.main.GeminiTextClient"), patch("realmgen.cli.main.PipelineDriver", driver_cls):
        result = runner.invoke(app, [flag, "my-docs"])

    assert result.exit_code == 0, result.stdout
    assert driver_cls.call_args.kwargs["project_dir"] == Path("my-docs")


def test_exhausted_retries_exit_with_error(api_key):
    driver_cls = fake_driver(error=RetriesExhaustedError("executeGeneratedScript", 3))

    with patch("realmgen.cli.main.GeminiTextClient"), patch("realmgen.cli.main.PipelineDriver", driver_cls):
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Pipeline Failed" in result.stdout
    assert "executeGeneratedScript" in result.stdout


def test_invalid_configuration_exits_with_error(api_key, monkeypatch):
    monkeypatch.setenv("REALMGEN_STEP_TRY_LIMIT", "0")

    with patch("realmgen.cli.main.GeminiTextClient"), patch("realmgen.cli.main.PipelineDriver"):
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Configuration Error" in result.stdout
