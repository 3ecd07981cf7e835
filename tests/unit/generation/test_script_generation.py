"""Tests for file creation script generation."""

import json

import pytest

from realmgen.generation.exceptions import ScriptGenerationError
from realmgen.generation.script import build_script_prompt, generate_file_creation_script
from realmgen.llm.exceptions import InvalidLLMResponseError


def test_build_script_prompt_embeds_directory_and_files(sample_files):
    prompt = build_script_prompt("realm-project", sample_files)

    assert "Create a folder called realm-project." in prompt
    assert json.dumps(sample_files, indent=2) in prompt
    assert "Avoid backticks" in prompt
    assert "path.join()" in prompt


def test_build_script_prompt_with_empty_mapping():
    prompt = build_script_prompt("docs", {})

    assert "Create a folder called docs." in prompt
    assert "{}" in prompt


def test_build_script_prompt_keeps_quotes_unescaped():
    prompt = build_script_prompt("docs", {"index.md": 'Say "hello" & <wave>'})

    assert '\\"hello\\" & <wave>' in prompt


@pytest.mark.asyncio
async def test_generate_file_creation_script_returns_raw_text(make_llm, sample_files):
    script = "const fs = require('fs');\nfs.mkdirSync('realm-project');\n"
    llm = make_llm([script])

    result = await generate_file_creation_script(llm, "realm-project", sample_files)

    assert result == script
    assert "realm-project" in llm.prompts[0]


@pytest.mark.asyncio
async def test_generate_file_creation_script_defaults_to_empty_mapping(make_llm):
    llm = make_llm(["console.log('ok');"])

    await generate_file_creation_script(llm, "docs")

    assert "{}" in llm.prompts[0]


@pytest.mark.asyncio
@pytest.mark.parametrize("response", ["   \n", InvalidLLMResponseError("empty")])
async def test_generate_file_creation_script_rejects_empty_output(make_llm, response):
    llm = make_llm([response])

    with pytest.raises(ScriptGenerationError):
        await generate_file_creation_script(llm, "docs", {})


@pytest.mark.asyncio
async def test_generate_file_creation_script_propagates_api_errors(make_llm):
    llm = make_llm([ConnectionError("network down")])

    with pytest.raises(ConnectionError):
        await generate_file_creation_script(llm, "docs", {})
