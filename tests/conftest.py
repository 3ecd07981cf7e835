from __future__ import annotations

import json
from collections.abc import Iterable

import pytest

from realmgen.config.settings import API_KEY_ENV_VAR, RealmgenSettings

SAMPLE_FILES = {
    "index.md": "# Museum API\n\nWelcome to the Museum API documentation.\n",
    "openapi.yaml": "openapi: 3.1.0\ninfo:\n  title: Museum API\n  version: 1.0.0\npaths: {}\n",
}


class FakeLLM:
    """Scripted stand-in for ``GeminiTextClient``.

    Each call pops the next response; exceptions in the list are raised.
    """

    def __init__(self, responses: Iterable[str | BaseException] = ()) -> None:
        self.responses = list(responses)
        self.prompts: list[str] = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            msg = f"FakeLLM has no response left for prompt #{len(self.prompts)}"
            raise AssertionError(msg)
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def sample_files() -> dict[str, str]:
    return dict(SAMPLE_FILES)


@pytest.fixture
def fenced_structure_response() -> str:
    return f"```json\n{json.dumps(SAMPLE_FILES, indent=2)}\n```\n"


@pytest.fixture
def make_llm():
    return FakeLLM


@pytest.fixture
def settings(tmp_path) -> RealmgenSettings:
    return RealmgenSettings(project_dir=tmp_path / "realm-project", step_try_limit=3)


@pytest.fixture
def api_key(monkeypatch) -> str:
    monkeypatch.setenv(API_KEY_ENV_VAR, "test-key")
    return "test-key"
