"""Prompt template rendering with test variables and prompt filters.

Placeholders use double braces and may pipe through named filters:

    Translate {{ text }} into {{ language | upper }}

Filters are plain callables loaded from plugin references.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from promptgrid.plugins import load_object

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][\w.]*)\s*((?:\|\s*[A-Za-z_]\w*\s*)*)\}\}")


def read_filters(filters: Mapping[str, str]) -> dict[str, Callable[..., Any]]:
    """Load prompt filter callables from plugin references.

    Args:
        filters: Mapping of filter name to plugin reference
            ('filters.py:shout' or 'my_pkg.filters.shout').

    Returns:
        Mapping of filter name to callable.

    Raises:
        TypeError: If a reference does not resolve to a callable.
    """
    loaded: dict[str, Callable[..., Any]] = {}
    for name, ref in filters.items():
        func = load_object(ref, default_attr=name)
        if not callable(func):
            raise TypeError(f"Prompt filter '{name}' ({ref}) is not callable.")
        loaded[name] = func
    return loaded


def prompt_filter_names(template: str) -> list[str]:
    """Return the filter names used by a template, in order of appearance."""
    names: list[str] = []
    for match in PLACEHOLDER_RE.finditer(template):
        names.extend(f.strip() for f in match.group(2).split("|") if f.strip())
    return names


def check_prompt_filters(
    templates: Iterable[str], filters: Mapping[str, Callable[..., Any]]
) -> None:
    """Raise ValueError if a template pipes through a filter that is not loaded."""
    for template in templates:
        for name in prompt_filter_names(template):
            if name not in filters:
                raise ValueError(
                    f"Unknown prompt filter '{name}' in prompt: {template}"
                )


def _lookup(variables: Mapping[str, Any], dotted: str) -> Any:
    value: Any = variables
    for part in dotted.split("."):
        if isinstance(value, Mapping) and part in value:
            value = value[part]
        else:
            return ""
    return value


def render_prompt(
    template: str,
    variables: Mapping[str, Any] | None = None,
    filters: Mapping[str, Callable[..., Any]] | None = None,
) -> str:
    """Substitute {{ var }} placeholders, applying filters left to right.

    Unknown variables render as an empty string.

    Raises:
        ValueError: If a placeholder names an unknown filter.
    """
    variables = variables or {}
    filters = filters or {}

    def replace(match: re.Match[str]) -> str:
        value = _lookup(variables, match.group(1))
        for name in (f.strip() for f in match.group(2).split("|") if f.strip()):
            if name not in filters:
                raise ValueError(f"Unknown prompt filter '{name}'.")
            value = filters[name](value)
        return str(value)

    return PLACEHOLDER_RE.sub(replace, template)
