"""BaseProvider ABC and the response dataclasses every provider returns.

All providers (OpenAI, custom plugins) subclass BaseProvider and
implement id() and call_api(). call_api() must never raise: transport
and response-shape failures are reported through ProviderResponse.error.

These are plain dataclasses (not Pydantic) to avoid overhead in the
hot path of provider calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class TokenUsage:
    """Token usage counts from a single provider call."""

    total: int = 0
    prompt: int = 0
    completion: int = 0


@dataclass
class ProviderResponse:
    """Result of a single call_api() invocation.

    Exactly one of output and error is set.
    """

    output: str | None = None
    error: str | None = None
    token_usage: TokenUsage | None = None

    def __post_init__(self) -> None:
        if (self.output is None) == (self.error is None):
            raise ValueError(
                "ProviderResponse requires exactly one of 'output' or 'error'."
            )

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseProvider(ABC):
    """Abstract base class for all providers.

    Subclasses must implement id() and call_api(). Providers own their
    credentials and host configuration and are not modified after
    construction.
    """

    label: str | None = None

    @abstractmethod
    def id(self) -> str:
        """Return the stable provider identifier (e.g. 'openai:gpt-4')."""
        ...

    @abstractmethod
    async def call_api(self, prompt: str) -> ProviderResponse:
        """Send a prompt to the provider and return its response.

        Args:
            prompt: The fully rendered prompt string.

        Returns:
            ProviderResponse carrying either output and token usage,
            or an error message.
        """
        ...

    def display_name(self) -> str:
        """Human-readable label, falling back to id()."""
        return self.label or self.id()

    def __str__(self) -> str:
        return f"[Provider {self.id()}]"
