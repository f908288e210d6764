"""Provider settings and provider option objects.

ProviderSettings captures the environment-sourced configuration shared
by the builtin providers (timeout, credentials, host, generation
defaults). ProviderOptions is the object form of a provider
specification used in suite configs and assertion overrides.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_OPENAI_HOST = "api.openai.com"

# Environment variable -> ProviderSettings field.
ENV_FIELDS: dict[str, str] = {
    "REQUEST_TIMEOUT_MS": "request_timeout_ms",
    "OPENAI_API_KEY": "api_key",
    "OPENAI_API_HOST": "api_host",
    "OPENAI_MAX_TOKENS": "max_tokens",
    "OPENAI_TEMPERATURE": "temperature",
}


class ProviderSettings(BaseModel):
    """Settings shared by the builtin providers.

    Every field falls back to a documented default except api_key,
    which has none (providers reject a missing key at construction).
    """

    model_config = {"extra": "forbid", "frozen": True}

    request_timeout_ms: int = Field(default=10_000, gt=0)
    api_key: str | None = None
    api_host: str = DEFAULT_OPENAI_HOST
    max_tokens: int = Field(default=1024, ge=1)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)

    @classmethod
    def from_env(cls, env: Mapping[str, Any] | None = None) -> ProviderSettings:
        """Build settings from the process environment.

        Args:
            env: Optional mapping overlaid on os.environ (suite-level env).

        Returns:
            Validated ProviderSettings. Empty values count as unset.
        """
        merged: dict[str, str] = dict(os.environ)
        if env:
            merged.update({k: str(v) for k, v in env.items()})

        values: dict[str, Any] = {}
        for var, field_name in ENV_FIELDS.items():
            raw = merged.get(var)
            if raw:
                values[field_name] = raw
        return cls.model_validate(values)

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> ProviderSettings:
        """Return a copy with recognized per-provider config keys applied."""
        if not overrides:
            return self
        known = {k: v for k, v in overrides.items() if k in type(self).model_fields}
        if not known:
            return self
        return type(self).model_validate({**self.model_dump(), **known})


class ProviderOptions(BaseModel):
    """Object form of a provider specification.

    Used for per-assertion and per-test provider overrides. The id is
    optional at parse time so that a missing id can be reported with
    test/assertion context during resolution.
    """

    model_config = {"extra": "allow"}

    id: str | None = None
    label: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)
