"""Result data models for evaluation outputs.

These models encode the evaluation output contract: one EvaluateResult
per prompt x provider x test cell, aggregate stats, and the summary
returned by evaluate().
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from promptgrid.models.suite import PromptEntry

RESULTS_VERSION = 1


class TokenUsageStats(BaseModel):
    """Token usage counts, per cell or summed across a run."""

    total: int = 0
    prompt: int = 0
    completion: int = 0
    cached: int = 0


class EvaluateResult(BaseModel):
    """Outcome of a single provider call in the evaluation matrix."""

    prompt: PromptEntry
    rendered_prompt: str
    vars: dict[str, Any] = Field(default_factory=dict)
    provider_id: str
    provider_label: str
    test_index: int | None = None
    output: str | None = None
    error: str | None = None
    success: bool
    cached: bool = False
    latency_ms: int = 0
    token_usage: TokenUsageStats = Field(default_factory=TokenUsageStats)


class EvaluateStats(BaseModel):
    """Aggregate counts for a run."""

    successes: int = 0
    failures: int = 0
    token_usage: TokenUsageStats = Field(default_factory=TokenUsageStats)


class EvaluateSummary(BaseModel):
    """Everything evaluate() returns, ready for JSON serialization."""

    version: int = RESULTS_VERSION
    description: str = ""
    results: list[EvaluateResult] = Field(default_factory=list)
    stats: EvaluateStats = Field(default_factory=EvaluateStats)
