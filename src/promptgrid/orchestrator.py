"""Evaluation setup orchestrator: the evaluate() entry point.

Builds a fully resolved TestSuite from an EvaluateTestSuite, runs the
evaluation engine, and dispatches the summary to output writers. Setup
steps run strictly in order and any setup failure aborts the run before
the engine is called. Failures after the engine returns are logged and
never discard the computed summary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from promptgrid.cache import ResponseCache
from promptgrid.evaluation.engine import EvaluationEngine, run_evaluation
from promptgrid.evaluation.prompts import normalize_prompts
from promptgrid.evaluation.resolver import resolve_nested_providers
from promptgrid.evaluation.templating import check_prompt_filters, read_filters
from promptgrid.loader.tests import read_tests
from promptgrid.models.result import EvaluateSummary
from promptgrid.models.suite import EvaluateOptions, EvaluateTestSuite, TestSuite
from promptgrid.providers.registry import load_providers
from promptgrid.storage.writers import (
    write_latest_results,
    write_multiple_outputs,
    write_output,
)
from promptgrid.telemetry import Telemetry
from promptgrid.telemetry import telemetry as default_telemetry

logger = logging.getLogger(__name__)


async def build_test_suite(test_suite: EvaluateTestSuite) -> TestSuite:
    """Resolve providers, load tests, normalize prompts, resolve nested providers.

    The input suite is not modified.
    """
    providers = await load_providers(test_suite.providers, env=test_suite.env)
    tests = read_tests(test_suite.tests)
    prompt_filters = read_filters(test_suite.prompt_filters)
    prompts = normalize_prompts(test_suite.prompts)
    check_prompt_filters((p.raw for p in prompts), prompt_filters)

    await resolve_nested_providers(tests, env=test_suite.env)

    return TestSuite(
        description=test_suite.description,
        providers=providers,
        prompts=prompts,
        tests=tests,
        prompt_filters=prompt_filters,
        env=test_suite.env,
    )


def _write_outputs(summary: EvaluateSummary, test_suite: EvaluateTestSuite) -> None:
    output_path = test_suite.output_path
    if not output_path:
        return
    try:
        if isinstance(output_path, str):
            write_output(output_path, summary, test_suite)
        else:
            write_multiple_outputs(output_path, summary, test_suite)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to write output to %s: %s", output_path, exc)


def _write_latest(summary: EvaluateSummary, test_suite: EvaluateTestSuite) -> None:
    try:
        path = write_latest_results(summary, test_suite)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to write latest results: %s", exc)
    else:
        logger.debug("Wrote latest results to %s", path)


async def evaluate(
    test_suite: EvaluateTestSuite | Mapping[str, Any],
    options: EvaluateOptions | Mapping[str, Any] | None = None,
    *,
    engine: EvaluationEngine | None = None,
    telemetry_client: Telemetry | None = None,
) -> EvaluateSummary:
    """Set up and run an evaluation.

    Args:
        test_suite: Suite definition (model or plain mapping).
        options: Run options; cache=False disables the response cache.
        engine: Evaluation engine; defaults to run_evaluation.
        telemetry_client: Telemetry instance; defaults to the module-level one.

    Returns:
        The engine's EvaluateSummary, unchanged.

    Raises:
        ValueError / TypeError / ImportError / ...: Setup errors (bad
            provider specs, missing credentials, unloadable modules,
            invalid tests) before the engine runs.
    """
    if not isinstance(test_suite, EvaluateTestSuite):
        test_suite = EvaluateTestSuite.model_validate(dict(test_suite))
    if options is None:
        options = EvaluateOptions()
    elif not isinstance(options, EvaluateOptions):
        options = EvaluateOptions.model_validate(dict(options))
    engine = engine or run_evaluation
    telemetry_client = telemetry_client or default_telemetry

    constructed = await build_test_suite(test_suite)

    cache = ResponseCache(enabled=options.cache)
    if not options.cache:
        logger.debug("Response cache disabled for this run")
    telemetry_client.maybe_show_notice()
    telemetry_client.record(
        "eval_ran",
        {
            "providers": len(constructed.providers),
            "prompts": len(constructed.prompts),
            "tests": len(constructed.tests),
            "cache": options.cache,
        },
    )

    summary = await engine(constructed, options, cache)

    _write_outputs(summary, test_suite)
    if test_suite.write_latest_results:
        _write_latest(summary, test_suite)

    try:
        await telemetry_client.send()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Telemetry flush failed: %s", exc)

    return summary
