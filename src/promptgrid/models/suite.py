"""Test suite data models.

EvaluateTestSuite is the user-facing contract (YAML config or Python
API) with unresolved provider specifications and raw prompts.
TestSuite is the fully resolved value handed to the evaluation engine.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from promptgrid.providers.base import BaseProvider


class PromptEntry(BaseModel):
    """Canonical prompt: raw is sent to providers, display is shown in reports."""

    model_config = {"frozen": True}

    raw: str
    display: str


class Assertion(BaseModel):
    """A single check applied to a provider's output.

    Assertion semantics belong to the grading engine; only the provider
    override is interpreted here. Additional keys are preserved.
    """

    model_config = {"extra": "allow"}

    type: str
    value: Any = None
    provider: Any = None


class TestOptions(BaseModel):
    """Per-test options. provider is the test's default grading provider."""

    model_config = {"extra": "allow"}

    provider: Any = None


class TestCase(BaseModel):
    """One row of the evaluation matrix: variables plus assertions."""

    __test__ = False

    model_config = {"extra": "forbid", "populate_by_name": True}

    description: str = ""
    vars: dict[str, Any] = Field(default_factory=dict)
    assert_: list[Assertion] = Field(default_factory=list, alias="assert")
    options: TestOptions = Field(default_factory=TestOptions)


class EvaluateOptions(BaseModel):
    """Run-wide options for a single evaluate() call."""

    model_config = {"extra": "forbid"}

    cache: bool = True
    max_concurrency: int = Field(default=4, ge=1)


class EvaluateTestSuite(BaseModel):
    """Suite definition as supplied by the user.

    providers accepts a single specification or a list of them (strings,
    option mappings with an 'id', or BaseProvider instances). tests is
    an inline list, a YAML/JSON file path or glob, or a list of paths.
    """

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    description: str = ""
    providers: Any
    prompts: list[Any]
    tests: str | list[Any] | None = None
    env: dict[str, str] | None = None
    prompt_filters: dict[str, str] = Field(default_factory=dict)
    output_path: str | list[str] | None = None
    write_latest_results: bool = False


class TestSuite(BaseModel):
    """Fully resolved suite: concrete providers, loaded tests, canonical prompts."""

    __test__ = False

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    description: str = ""
    providers: list[BaseProvider]
    prompts: list[PromptEntry]
    tests: list[TestCase] = Field(default_factory=list)
    prompt_filters: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    env: dict[str, str] | None = None
