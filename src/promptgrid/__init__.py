"""promptgrid - evaluate prompts against LLM providers and test cases."""

__version__ = "0.1.0"

from promptgrid.orchestrator import build_test_suite, evaluate  # noqa: E402
from promptgrid.providers import BaseProvider, ProviderResponse, TokenUsage  # noqa: E402

__all__ = [
    "BaseProvider",
    "ProviderResponse",
    "TokenUsage",
    "__version__",
    "build_test_suite",
    "evaluate",
]
