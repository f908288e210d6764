"""promptgrid providers - provider abstraction and resolution layer.

Re-exports the BaseProvider ABC, response dataclasses, the OpenAI
providers, settings, and the registry functions.
"""

from promptgrid.providers.base import BaseProvider, ProviderResponse, TokenUsage
from promptgrid.providers.openai_provider import (
    OpenAIChatProvider,
    OpenAICompletionProvider,
    OpenAIGenericProvider,
)
from promptgrid.providers.registry import (
    load_provider,
    load_providers,
    resolve_provider,
)
from promptgrid.providers.settings import ProviderOptions, ProviderSettings

__all__ = [
    "BaseProvider",
    "OpenAIChatProvider",
    "OpenAICompletionProvider",
    "OpenAIGenericProvider",
    "ProviderOptions",
    "ProviderResponse",
    "ProviderSettings",
    "TokenUsage",
    "load_provider",
    "load_providers",
    "resolve_provider",
]
