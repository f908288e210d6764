"""OpenAI providers: completion and chat families.

Both families share credential/host handling in OpenAIGenericProvider
and talk to the API through a lazily created AsyncOpenAI client. Every
failure inside call_api() is converted into a ProviderResponse error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import openai

from promptgrid.providers.base import BaseProvider, ProviderResponse, TokenUsage
from promptgrid.providers.settings import ProviderSettings

logger = logging.getLogger(__name__)


class OpenAIGenericProvider(BaseProvider):
    """Shared base for OpenAI providers.

    Resolves credentials and host from explicit arguments, per-provider
    config, and the environment (in that order). A missing API key is a
    configuration error raised here, before any network call.
    """

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        config: Mapping[str, Any] | None = None,
        label: str | None = None,
        settings: ProviderSettings | None = None,
    ) -> None:
        self.model_name = model_name
        self.label = label

        base = settings if settings is not None else ProviderSettings.from_env()
        self.settings = base.with_overrides(config)

        key = api_key or self.settings.api_key
        if not key:
            raise ValueError(
                "OpenAI API key is not set. Set the OPENAI_API_KEY environment "
                "variable or pass it as an argument to the constructor."
            )
        self.api_key = key
        self.api_host = self.settings.api_host
        self._client: Any = None

    def id(self) -> str:
        return f"openai:{self.model_name}"

    def __str__(self) -> str:
        return f"[OpenAI Provider {self.model_name}]"

    @property
    def base_url(self) -> str:
        if "://" in self.api_host:
            return f"{self.api_host.rstrip('/')}/v1"
        return f"https://{self.api_host}/v1"

    def _get_client(self) -> Any:
        """Lazily initialize and return the AsyncOpenAI client."""
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.settings.request_timeout_ms / 1000,
                max_retries=0,
            )
        return self._client

    def _generation_params(self) -> dict[str, Any]:
        return {
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }


def _raw_body(response: Any) -> str:
    """Serialize an SDK response object for error messages."""
    if hasattr(response, "model_dump"):
        return json.dumps(response.model_dump(), default=str)
    return repr(response)


def _token_usage(response: Any) -> TokenUsage:
    usage = response.usage
    return TokenUsage(
        total=usage.total_tokens,
        prompt=usage.prompt_tokens,
        completion=usage.completion_tokens,
    )


def _check_output(output: Any) -> str:
    if not isinstance(output, str):
        raise TypeError(f"expected string output, got {type(output).__name__}")
    return output


class OpenAICompletionProvider(OpenAIGenericProvider):
    """Provider for the OpenAI text completion endpoint."""

    OPENAI_COMPLETION_MODELS = [
        "text-davinci-003",
        "text-davinci-002",
        "text-curie-001",
        "text-babbage-001",
        "text-ada-001",
    ]

    def __init__(self, model_name: str, **kwargs: Any) -> None:
        if model_name not in self.OPENAI_COMPLETION_MODELS:
            logger.warning("Using unknown OpenAI completion model: %s", model_name)
        super().__init__(model_name, **kwargs)

    async def call_api(self, prompt: str) -> ProviderResponse:
        body: dict[str, Any] = {
            "model": self.model_name,
            "prompt": prompt,
            **self._generation_params(),
        }
        logger.debug("Calling OpenAI API: %s", json.dumps(body))

        try:
            response = await self._get_client().completions.create(**body)
        except Exception as exc:  # noqa: BLE001
            return ProviderResponse(error=f"API call error: {type(exc).__name__}: {exc}")

        logger.debug("\tOpenAI API response: %s", _raw_body(response))
        try:
            return ProviderResponse(
                output=_check_output(response.choices[0].text),
                token_usage=_token_usage(response),
            )
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            return ProviderResponse(
                error=f"API response error: {type(exc).__name__}: {exc}: {_raw_body(response)}"
            )


class OpenAIChatProvider(OpenAIGenericProvider):
    """Provider for the OpenAI chat completion endpoint.

    The prompt may be a JSON list of {role, content} turns; anything
    else is sent as a single user turn.
    """

    OPENAI_CHAT_MODELS = [
        "gpt-4",
        "gpt-4-0314",
        "gpt-4-32k",
        "gpt-4-32k-0314",
        "gpt-3.5-turbo",
        "gpt-3.5-turbo-0301",
    ]

    def __init__(self, model_name: str, **kwargs: Any) -> None:
        if model_name not in self.OPENAI_CHAT_MODELS:
            logger.warning("Using unknown OpenAI chat model: %s", model_name)
        super().__init__(model_name, **kwargs)

    @staticmethod
    def parse_messages(prompt: str) -> list[Any]:
        """Parse a prompt into chat messages, falling back to one user turn."""
        try:
            messages = json.loads(prompt)
        except ValueError:
            messages = None
        if not isinstance(messages, list):
            messages = [{"role": "user", "content": prompt}]
        return messages

    async def call_api(self, prompt: str) -> ProviderResponse:
        body: dict[str, Any] = {
            "model": self.model_name,
            "messages": self.parse_messages(prompt),
            **self._generation_params(),
        }
        logger.debug("Calling OpenAI API: %s", json.dumps(body))

        try:
            response = await self._get_client().chat.completions.create(**body)
        except Exception as exc:  # noqa: BLE001
            return ProviderResponse(error=f"API call error: {type(exc).__name__}: {exc}")

        logger.debug("\tOpenAI API response: %s", _raw_body(response))
        try:
            return ProviderResponse(
                output=_check_output(response.choices[0].message.content),
                token_usage=_token_usage(response),
            )
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            return ProviderResponse(
                error=f"API response error: {type(exc).__name__}: {exc}: {_raw_body(response)}"
            )
