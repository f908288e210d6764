"""In-memory response cache for provider calls.

The cache is created per evaluate() call from the run's cache flag and
passed explicitly to the engine; there is no process-wide switch.
Only successful responses are stored.
"""

from __future__ import annotations

from promptgrid.providers.base import ProviderResponse


class ResponseCache:
    """Maps (provider id, rendered prompt) to a successful ProviderResponse."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: dict[tuple[str, str], ProviderResponse] = {}

    def get(self, provider_id: str, prompt: str) -> ProviderResponse | None:
        if not self.enabled:
            return None
        return self._entries.get((provider_id, prompt))

    def set(self, provider_id: str, prompt: str, response: ProviderResponse) -> None:
        if not self.enabled or not response.ok:
            return
        self._entries[(provider_id, prompt)] = response

    def __len__(self) -> int:
        return len(self._entries)
