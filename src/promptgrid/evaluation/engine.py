"""Default evaluation engine: runs the prompt x provider x test matrix.

Renders each prompt with the test's variables, calls the provider (or
reuses a cached success), and collects one EvaluateResult per cell.
Concurrency is bounded via asyncio.Semaphore + TaskGroup. Assertion
grading is left to dedicated engines; success here means the provider
returned output.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from promptgrid.cache import ResponseCache
from promptgrid.evaluation.templating import render_prompt
from promptgrid.models.result import (
    EvaluateResult,
    EvaluateStats,
    EvaluateSummary,
    TokenUsageStats,
)
from promptgrid.models.suite import EvaluateOptions, PromptEntry, TestCase, TestSuite
from promptgrid.providers.base import BaseProvider

logger = logging.getLogger(__name__)

EvaluationEngine = Callable[
    [TestSuite, EvaluateOptions, ResponseCache], Awaitable[EvaluateSummary]
]


async def _run_cell(
    suite: TestSuite,
    prompt: PromptEntry,
    provider: BaseProvider,
    test: TestCase,
    test_index: int | None,
    cache: ResponseCache,
) -> EvaluateResult:
    rendered = render_prompt(prompt.raw, test.vars, suite.prompt_filters)
    provider_id = provider.id()

    start = time.perf_counter()
    response = cache.get(provider_id, rendered)
    cached = response is not None
    if response is None:
        response = await provider.call_api(rendered)
        cache.set(provider_id, rendered, response)
    latency_ms = int((time.perf_counter() - start) * 1000)

    if response.error is not None:
        logger.debug("Provider %s failed: %s", provider_id, response.error)

    usage = response.token_usage
    token_usage = TokenUsageStats()
    if usage is not None:
        token_usage = TokenUsageStats(
            total=usage.total,
            prompt=usage.prompt,
            completion=usage.completion,
            cached=usage.total if cached else 0,
        )

    return EvaluateResult(
        prompt=prompt,
        rendered_prompt=rendered,
        vars=dict(test.vars),
        provider_id=provider_id,
        provider_label=provider.display_name(),
        test_index=test_index,
        output=response.output,
        error=response.error,
        success=response.ok,
        cached=cached,
        latency_ms=latency_ms,
        token_usage=token_usage,
    )


def compute_stats(results: list[EvaluateResult]) -> EvaluateStats:
    """Sum successes, failures and token usage across results."""
    stats = EvaluateStats()
    for r in results:
        if r.success:
            stats.successes += 1
        else:
            stats.failures += 1
        stats.token_usage.total += r.token_usage.total
        stats.token_usage.prompt += r.token_usage.prompt
        stats.token_usage.completion += r.token_usage.completion
        stats.token_usage.cached += r.token_usage.cached
    return stats


async def run_evaluation(
    suite: TestSuite,
    options: EvaluateOptions,
    cache: ResponseCache,
) -> EvaluateSummary:
    """Run every prompt x provider x test cell and return the summary.

    Args:
        suite: Fully resolved test suite.
        options: Run options (max_concurrency is honored here).
        cache: Response cache for this run.

    Returns:
        EvaluateSummary with results in matrix order and aggregate stats.
    """
    tests: list[tuple[int | None, TestCase]] = list(enumerate(suite.tests))
    if not tests:
        tests = [(None, TestCase())]

    cells = [
        (prompt, provider, test_index, test)
        for prompt in suite.prompts
        for provider in suite.providers
        for test_index, test in tests
    ]
    logger.info(
        "Running %d evaluations (%d prompts x %d providers x %d tests)",
        len(cells),
        len(suite.prompts),
        len(suite.providers),
        len(tests),
    )

    semaphore = asyncio.Semaphore(options.max_concurrency)
    results: list[EvaluateResult | None] = [None] * len(cells)

    async def run_one(idx: int) -> None:
        prompt, provider, test_index, test = cells[idx]
        async with semaphore:
            results[idx] = await _run_cell(
                suite, prompt, provider, test, test_index, cache
            )

    async with asyncio.TaskGroup() as tg:
        for idx in range(len(cells)):
            tg.create_task(run_one(idx))

    completed = [r for r in results if r is not None]
    return EvaluateSummary(
        description=suite.description,
        results=completed,
        stats=compute_stats(completed),
    )
