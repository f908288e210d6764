"""Shared fixtures: isolate tests from the caller's provider environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from promptgrid.providers.settings import ENV_FIELDS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear provider env vars, disable telemetry, and sandbox the config dir."""
    for var in ENV_FIELDS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("PROMPTGRID_TELEMETRY_URL", raising=False)
    monkeypatch.setenv("PROMPTGRID_DISABLE_TELEMETRY", "1")
    monkeypatch.setenv("PROMPTGRID_CONFIG_DIR", str(tmp_path / "config"))


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Provide a fake OpenAI API key through the environment."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    return "sk-test"


@pytest.fixture(autouse=True)
def quiet_telemetry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Swap the process-wide telemetry client for a disabled one."""
    from promptgrid.telemetry import Telemetry

    monkeypatch.setattr("promptgrid.orchestrator.default_telemetry", Telemetry(disabled=True))
