"""Tests for promptgrid.cache - ResponseCache."""

from __future__ import annotations

from promptgrid.cache import ResponseCache
from promptgrid.providers.base import ProviderResponse


class TestResponseCache:
    def test_stores_successes(self):
        cache = ResponseCache()
        resp = ProviderResponse(output="hi")
        cache.set("openai:gpt-4", "prompt", resp)
        assert cache.get("openai:gpt-4", "prompt") is resp
        assert len(cache) == 1

    def test_keyed_by_provider_and_prompt(self):
        cache = ResponseCache()
        cache.set("a", "p", ProviderResponse(output="x"))
        assert cache.get("b", "p") is None
        assert cache.get("a", "q") is None

    def test_errors_not_stored(self):
        cache = ResponseCache()
        cache.set("a", "p", ProviderResponse(error="boom"))
        assert cache.get("a", "p") is None
        assert len(cache) == 0

    def test_disabled_never_stores(self):
        cache = ResponseCache(enabled=False)
        cache.set("a", "p", ProviderResponse(output="x"))
        assert cache.get("a", "p") is None
        assert len(cache) == 0
