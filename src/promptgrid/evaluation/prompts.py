"""Prompt normalizer -- reduces accepted prompt shapes to PromptEntry.

Accepted shapes:
- plain strings, passed through as both raw and display
- structured values (lists, numbers, ...), serialized to compact JSON
- a list made up entirely of mappings, treated as ONE chat conversation
  and serialized as a single entry
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from promptgrid.models.suite import PromptEntry


def serialize_prompt(value: Any) -> str:
    """Serialize a structured prompt to its canonical compact JSON text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def is_message_objects(prompts: Sequence[Any]) -> bool:
    """Return True if every element is a mapping (a chat message list).

    An empty list is deliberately not a message list, so normalizing no
    prompts yields no entries rather than a single "[]" prompt.
    """
    return bool(prompts) and all(isinstance(p, Mapping) for p in prompts)


def normalize_prompts(prompts: Sequence[Any]) -> list[PromptEntry]:
    """Convert a suite's raw prompts into canonical PromptEntry values."""
    if is_message_objects(prompts):
        serialized = serialize_prompt([dict(p) for p in prompts])
        return [PromptEntry(raw=serialized, display=serialized)]

    entries: list[PromptEntry] = []
    for prompt in prompts:
        if isinstance(prompt, str):
            entries.append(PromptEntry(raw=prompt, display=prompt))
        else:
            serialized = serialize_prompt(prompt)
            entries.append(PromptEntry(raw=serialized, display=serialized))
    return entries
