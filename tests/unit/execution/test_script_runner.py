"""Tests for sanitizing, persisting and executing the generated script."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from realmgen.config.settings import API_KEY_ENV_VAR
from realmgen.execution.runner import (
    execute_generated_script,
    persist_script,
    sanitize_script,
    script_environment,
)

TEMPLATE_LITERAL_SCRIPT = """
const fs = require('fs');
const path = require('path');
const dir = `realm-project`;
fs.writeFileSync(path.join(dir, 'index.md'), `# Hello ${name}`);
"""


def test_sanitize_script_replaces_every_backtick():
    sanitized = sanitize_script(TEMPLATE_LITERAL_SCRIPT)

    assert "`" not in sanitized
    assert 'const dir = "realm-project";' in sanitized
    assert '"# Hello ${name}"' in sanitized


def test_sanitize_script_handles_markdown_fences():
    script = "```javascript\nconsole.log('hi');\n```\n"

    sanitized = sanitize_script(script)

    assert "`" not in sanitized
    assert "console.log('hi');" in sanitized


def test_sanitize_script_trims_whitespace():
    assert sanitize_script("\n\n  console.log(1);  \n") == "console.log(1);"


def test_sanitize_script_keeps_plain_script_unchanged():
    script = "const fs = require(\"fs\");\nfs.mkdirSync('docs');"
    assert sanitize_script(script) == script


def test_persist_script_overwrites_previous_file(tmp_path: Path):
    target = tmp_path / "redocly-realm-script.js"
    target.write_text("old content", encoding="utf-8")

    written = persist_script("console.log('new');", target)

    assert written == target
    assert target.read_text(encoding="utf-8") == "console.log('new');"


def test_script_environment_drops_api_keys(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV_VAR, "secret")
    monkeypatch.setenv("GOOGLE_API_KEY", "secret-too")
    monkeypatch.setenv("REALMGEN_TEST_MARKER", "kept")

    env = script_environment()

    assert API_KEY_ENV_VAR not in env
    assert "GOOGLE_API_KEY" not in env
    assert env["REALMGEN_TEST_MARKER"] == "kept"


def test_execute_generated_script_runs_sanitized_file(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(API_KEY_ENV_VAR, "secret")

    with patch("realmgen.execution.runner.subprocess.run") as mock_run:
        assert execute_generated_script(TEMPLATE_LITERAL_SCRIPT) is True

    persisted = tmp_path / "redocly-realm-script.js"
    assert "`" not in persisted.read_text(encoding="utf-8")
    args, kwargs = mock_run.call_args
    assert args[0] == ["node", "redocly-realm-script.js"]
    assert kwargs["check"] is True
    assert kwargs["timeout"] is None
    assert API_KEY_ENV_VAR not in kwargs["env"]


def test_execute_generated_script_uses_configured_interpreter(tmp_path: Path):
    script_path = tmp_path / "create.js"

    with patch("realmgen.execution.runner.subprocess.run") as mock_run:
        execute_generated_script("console.log(1);", script_path=script_path, interpreter=("bun", "run"), timeout=5)

    args, kwargs = mock_run.call_args
    assert args[0] == ["bun", "run", str(script_path)]
    assert kwargs["timeout"] == 5


@pytest.mark.parametrize(
    "error",
    [
        subprocess.CalledProcessError(1, "node"),
        FileNotFoundError("node"),
        subprocess.TimeoutExpired("node", 5),
    ],
)
def test_execute_generated_script_reports_failure(tmp_path: Path, error):
    with patch("realmgen.execution.runner.subprocess.run", side_effect=error):
        assert execute_generated_script("process.exit(1);", script_path=tmp_path / "s.js") is False
