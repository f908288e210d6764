"""Nested provider resolution for tests and assertions.

Walks tests in declaration order and replaces every string or
options-object provider override (on the test's options and on each
assertion) with a concrete provider. Resolved providers are kept.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from promptgrid.models.suite import TestCase
from promptgrid.providers.base import BaseProvider
from promptgrid.providers.registry import resolve_provider
from promptgrid.providers.settings import ProviderOptions


def _missing_id(spec: Any) -> bool:
    if isinstance(spec, ProviderOptions):
        return not spec.id
    if isinstance(spec, Mapping):
        return not spec.get("id")
    return False


async def _resolve(
    spec: Any, where: str, env: Mapping[str, Any] | None
) -> BaseProvider:
    if _missing_id(spec):
        raise ValueError(f"Provider object must have an id ({where})")
    return await resolve_provider(spec, env=env)


async def resolve_nested_providers(
    tests: Sequence[TestCase],
    env: Mapping[str, Any] | None = None,
) -> None:
    """Resolve test-level and assertion-level provider overrides in place.

    Args:
        tests: Loaded test cases; their provider fields are replaced.
        env: Optional environment mapping for builtin provider settings.

    Raises:
        ValueError: If an options object lacks an id, or a spec is invalid.
        TypeError: If a provider field has an unsupported type.
    """
    for test_idx, test in enumerate(tests):
        label = test.description or f"test #{test_idx + 1}"

        spec = test.options.provider
        if spec is not None and not isinstance(spec, BaseProvider):
            test.options.provider = await _resolve(spec, f"{label} options", env)

        for assert_idx, assertion in enumerate(test.assert_):
            spec = assertion.provider
            if spec is None or isinstance(spec, BaseProvider):
                continue
            assertion.provider = await _resolve(
                spec, f"{label}, assertion #{assert_idx + 1} ({assertion.type})", env
            )
