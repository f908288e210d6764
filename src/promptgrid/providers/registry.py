"""Provider registry: turns provider specifications into providers.

Supports the builtin OpenAI grammar:

    openai:chat[:<model>]
    openai:completion[:<model>]
    openai:<known chat or completion model>

Anything else is a plugin reference to a user-supplied BaseProvider
subclass (a file path relative to cwd, or a dotted import path),
instantiated with no arguments.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from promptgrid.plugins import load_object
from promptgrid.providers.base import BaseProvider
from promptgrid.providers.openai_provider import (
    OpenAIChatProvider,
    OpenAICompletionProvider,
)
from promptgrid.providers.settings import ProviderOptions, ProviderSettings

OPENAI_PREFIX = "openai:"
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_COMPLETION_MODEL = "text-davinci-003"

# Attribute looked up in a custom provider file without an explicit ':Class'.
DEFAULT_PROVIDER_ATTR = "Provider"

ProviderSpec = str | ProviderOptions | Mapping[str, Any] | BaseProvider


def _coerce_options(options: ProviderOptions | Mapping[str, Any] | None) -> ProviderOptions | None:
    if options is None or isinstance(options, ProviderOptions):
        return options
    return ProviderOptions.model_validate(dict(options))


def _load_openai(
    provider_path: str,
    options: ProviderOptions | None,
    env: Mapping[str, Any] | None,
) -> BaseProvider:
    parts = provider_path.split(":", 2)
    model_type = parts[1] if len(parts) > 1 else ""
    model_name = parts[2] if len(parts) > 2 else ""

    kwargs: dict[str, Any] = {"settings": ProviderSettings.from_env(env)}
    if options is not None:
        kwargs["config"] = options.config
        kwargs["label"] = options.label

    if model_type == "chat":
        return OpenAIChatProvider(model_name or DEFAULT_CHAT_MODEL, **kwargs)
    if model_type == "completion":
        return OpenAICompletionProvider(model_name or DEFAULT_COMPLETION_MODEL, **kwargs)
    if model_type in OpenAIChatProvider.OPENAI_CHAT_MODELS:
        return OpenAIChatProvider(model_type, **kwargs)
    if model_type in OpenAICompletionProvider.OPENAI_COMPLETION_MODELS:
        return OpenAICompletionProvider(model_type, **kwargs)
    raise ValueError(
        f"Unknown OpenAI model type: {model_type}. Use one of the following "
        f"providers: openai:chat:<model name>, openai:completion:<model name>"
    )


def _load_custom(provider_path: str) -> BaseProvider:
    cls = load_object(provider_path, default_attr=DEFAULT_PROVIDER_ATTR)
    if not isinstance(cls, type) or not issubclass(cls, BaseProvider):
        raise TypeError(
            f"'{provider_path}' is not a subclass of BaseProvider. "
            f"Custom providers must inherit from promptgrid.providers.base.BaseProvider."
        )
    return cls()


async def load_provider(
    provider_path: str,
    options: ProviderOptions | Mapping[str, Any] | None = None,
    env: Mapping[str, Any] | None = None,
) -> BaseProvider:
    """Resolve a provider specification string and return a new provider.

    Args:
        provider_path: Builtin spec (e.g. 'openai:chat:gpt-4') or a plugin
            reference to a custom provider class.
        options: Optional provider options (label, config) for builtin
            providers.
        env: Optional environment mapping overlaid on os.environ.

    Returns:
        A freshly constructed provider.

    Raises:
        ValueError: For unknown OpenAI model types or a missing API key.
        TypeError: If a custom reference is not a BaseProvider subclass.
        ImportError / FileNotFoundError / AttributeError: From loading a
            custom provider, propagated unchanged.
    """
    opts = _coerce_options(options)
    if provider_path.startswith(OPENAI_PREFIX):
        return _load_openai(provider_path, opts, env)
    return _load_custom(provider_path)


async def resolve_provider(
    spec: ProviderSpec,
    env: Mapping[str, Any] | None = None,
) -> BaseProvider:
    """Resolve any provider specification to a provider.

    Strings go through load_provider(), options objects must carry an
    id and are loaded with themselves as options, and providers that
    are already resolved are returned unchanged.

    Raises:
        ValueError: If an options object has no id.
        TypeError: If spec is none of the accepted shapes.
    """
    if isinstance(spec, BaseProvider):
        return spec
    if isinstance(spec, str):
        return await load_provider(spec, env=env)
    if isinstance(spec, (ProviderOptions, Mapping)):
        opts = _coerce_options(spec)
        if not opts.id:
            raise ValueError("Provider object must have an id")
        return await load_provider(opts.id, options=opts, env=env)
    raise TypeError(
        f"Unsupported provider specification of type {type(spec).__name__}. "
        f"Expected a string, an options object with an 'id', or a provider."
    )


async def load_providers(
    specs: ProviderSpec | Sequence[ProviderSpec],
    env: Mapping[str, Any] | None = None,
) -> list[BaseProvider]:
    """Resolve one specification or a list of them, in order."""
    if isinstance(specs, (str, BaseProvider, ProviderOptions, Mapping)):
        return [await resolve_provider(specs, env=env)]
    return [await resolve_provider(spec, env=env) for spec in specs]
