"""promptgrid data models - re-exports all public model classes."""

from promptgrid.models.result import (
    EvaluateResult,
    EvaluateStats,
    EvaluateSummary,
    TokenUsageStats,
)
from promptgrid.models.suite import (
    Assertion,
    EvaluateOptions,
    EvaluateTestSuite,
    PromptEntry,
    TestCase,
    TestOptions,
    TestSuite,
)

__all__ = [
    "Assertion",
    "EvaluateOptions",
    "EvaluateResult",
    "EvaluateStats",
    "EvaluateSummary",
    "EvaluateTestSuite",
    "PromptEntry",
    "TestCase",
    "TestOptions",
    "TestSuite",
    "TokenUsageStats",
]
