"""Test case loader.

Accepts inline test definitions or references to YAML/JSON files
(globs allowed) and returns fresh TestCase objects. Caller-provided
TestCase instances are copied so that provider resolution never
mutates the caller's suite.
"""

from __future__ import annotations

import glob
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from promptgrid.models.suite import TestCase


def _copy_test(test: TestCase) -> TestCase:
    return test.model_copy(
        update={
            "vars": dict(test.vars),
            "assert_": [a.model_copy() for a in test.assert_],
            "options": test.options.model_copy(),
        }
    )


def _expand_paths(pattern: str) -> list[Path]:
    matches = sorted(glob.glob(pattern))
    if not matches:
        # Surface a plain FileNotFoundError for a literal, missing path.
        return [Path(pattern)]
    return [Path(m) for m in matches]


def read_test_file(filepath: Path) -> list[TestCase]:
    """Load a YAML or JSON file containing a list of test definitions.

    Args:
        filepath: Path to the test file.

    Returns:
        List of validated TestCase objects (empty for an empty file).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a list of mappings.
    """
    data = yaml.safe_load(filepath.read_text(encoding="utf-8"))
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(t, Mapping) for t in data):
        raise ValueError(
            f"Test file '{filepath}' must contain a list of test mappings."
        )
    return [TestCase.model_validate(t) for t in data]


def read_tests(
    tests: str | Sequence[Any] | None,
    base_dir: Path | None = None,
) -> list[TestCase]:
    """Load test cases from inline definitions and/or file references.

    Args:
        tests: None, a file path/glob, or a list mixing paths, mappings
            and TestCase instances.
        base_dir: Directory that relative file paths are resolved against.

    Returns:
        New TestCase objects in declaration order.
    """
    if tests is None:
        return []
    if isinstance(tests, str):
        tests = [tests]

    loaded: list[TestCase] = []
    for item in tests:
        if isinstance(item, TestCase):
            loaded.append(_copy_test(item))
        elif isinstance(item, Mapping):
            loaded.append(TestCase.model_validate(dict(item)))
        elif isinstance(item, str):
            pattern = str(base_dir / item) if base_dir is not None else item
            for path in _expand_paths(pattern):
                loaded.extend(read_test_file(path))
        else:
            raise TypeError(
                f"Unsupported test entry of type {type(item).__name__}. "
                f"Expected a mapping, a TestCase, or a file path."
            )
    return loaded
