"""promptgrid evaluation: prompt normalization, nested provider
resolution, template rendering, and the default evaluation engine."""

from promptgrid.evaluation.engine import EvaluationEngine, run_evaluation
from promptgrid.evaluation.prompts import normalize_prompts
from promptgrid.evaluation.resolver import resolve_nested_providers
from promptgrid.evaluation.templating import check_prompt_filters, read_filters, render_prompt

__all__ = [
    "EvaluationEngine",
    "check_prompt_filters",
    "normalize_prompts",
    "read_filters",
    "render_prompt",
    "resolve_nested_providers",
    "run_evaluation",
]
