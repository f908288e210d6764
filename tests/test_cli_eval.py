"""Tests for the promptgrid CLI (eval and version commands)."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from promptgrid import __version__
from promptgrid.cli.main import app

runner = CliRunner()

ECHO_PROVIDER = '''
from promptgrid.providers.base import BaseProvider, ProviderResponse, TokenUsage


class Provider(BaseProvider):
    def id(self):
        return "echo"

    async def call_api(self, prompt):
        if "fail" in prompt:
            return ProviderResponse(error="refused")
        return ProviderResponse(output=prompt.upper(), token_usage=TokenUsage(total=3))
'''


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory with a custom provider and a suite config."""
    (tmp_path / "echo.py").write_text(ECHO_PROVIDER, encoding="utf-8")
    (tmp_path / "tests.yaml").write_text(
        "- vars:\n    name: world\n", encoding="utf-8"
    )
    (tmp_path / "promptgrid.yaml").write_text(
        "description: cli smoke\n"
        "providers:\n  - echo.py\n"
        "prompts:\n  - 'Hello {{ name }}'\n"
        "tests: tests.yaml\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_eval_success(project):
    result = runner.invoke(app, ["eval"])
    assert result.exit_code == 0, result.output
    assert "HELLO WORLD" in result.output
    assert "Successes: 1" in result.output


def test_eval_failures_exit_1(project):
    (project / "promptgrid.yaml").write_text(
        "providers: echo.py\nprompts:\n  - please fail\n", encoding="utf-8"
    )
    result = runner.invoke(app, ["eval"])
    assert result.exit_code == 1
    assert "Failures: 1" in result.output


def test_eval_writes_outputs(project):
    out = project / "out.json"
    result = runner.invoke(app, ["eval", "-o", str(out), "--write-latest", "--no-cache"])
    assert result.exit_code == 0, result.output
    assert out.exists()
    assert (project / "config" / "output" / "latest.json").exists()


def test_eval_explicit_config(project, tmp_path_factory):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    config = elsewhere / "suite.yaml"
    config.write_text(
        "providers: echo.py\nprompts: ['hi']\n", encoding="utf-8"
    )
    result = runner.invoke(app, ["eval", "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert "HI" in result.output


def test_eval_no_config_exit_2(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["eval"])
    assert result.exit_code == 2


def test_eval_invalid_config_exit_2(project):
    (project / "promptgrid.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")
    result = runner.invoke(app, ["eval"])
    assert result.exit_code == 2


def test_eval_setup_error_exit_2(project):
    (project / "promptgrid.yaml").write_text(
        "providers: openai:chat:gpt-4\nprompts: ['hi']\n", encoding="utf-8"
    )
    result = runner.invoke(app, ["eval"])
    assert result.exit_code == 2


def test_eval_unknown_prompt_filter_exit_2(project):
    (project / "promptgrid.yaml").write_text(
        "providers: echo.py\nprompts:\n  - 'Hi {{ name | nope }}'\n", encoding="utf-8"
    )
    result = runner.invoke(app, ["eval"])
    assert result.exit_code == 2
    assert "Unknown prompt filter" in result.output
