"""Tests for promptgrid.loader.tests - test case loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from promptgrid.loader.tests import read_test_file, read_tests
from promptgrid.models.suite import TestCase

TESTS_YAML = """\
- description: greeting
  vars:
    name: Ada
  assert:
    - type: contains
      value: Ada
- vars:
    name: Bob
"""


class TestReadTests:
    def test_none(self):
        assert read_tests(None) == []

    def test_inline_mappings(self):
        tests = read_tests([{"vars": {"q": "1"}}, {"vars": {"q": "2"}}])
        assert [t.vars["q"] for t in tests] == ["1", "2"]

    def test_assert_alias(self):
        tests = read_tests([{"assert": [{"type": "equals", "value": "x"}]}])
        assert tests[0].assert_[0].type == "equals"
        assert tests[0].assert_[0].value == "x"

    def test_unknown_test_field_rejected(self):
        with pytest.raises(ValidationError):
            read_tests([{"varz": {}}])

    def test_testcase_instances_are_copied(self):
        original = TestCase.model_validate(
            {"vars": {"a": 1}, "assert": [{"type": "x", "provider": "openai:gpt-4"}]}
        )
        loaded = read_tests([original])[0]

        loaded.assert_[0].provider = "replaced"
        loaded.options.provider = "replaced"
        loaded.vars["a"] = 2

        assert original.assert_[0].provider == "openai:gpt-4"
        assert original.options.provider is None
        assert original.vars == {"a": 1}

    def test_yaml_file(self, tmp_path: Path):
        path = tmp_path / "tests.yaml"
        path.write_text(TESTS_YAML, encoding="utf-8")

        tests = read_tests(str(path))

        assert [t.vars["name"] for t in tests] == ["Ada", "Bob"]
        assert tests[0].description == "greeting"
        assert tests[0].assert_[0].value == "Ada"

    def test_glob_and_base_dir(self, tmp_path: Path):
        (tmp_path / "a.yaml").write_text("- vars: {n: 1}\n", encoding="utf-8")
        (tmp_path / "b.yaml").write_text("- vars: {n: 2}\n", encoding="utf-8")

        tests = read_tests("*.yaml", base_dir=tmp_path)

        assert [t.vars["n"] for t in tests] == [1, 2]

    def test_mixed_list(self, tmp_path: Path):
        path = tmp_path / "tests.json"
        path.write_text('[{"vars": {"n": 2}}]', encoding="utf-8")
        tests = read_tests([{"vars": {"n": 1}}, str(path)])
        assert [t.vars["n"] for t in tests] == [1, 2]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_tests(str(tmp_path / "missing.yaml"))

    def test_unsupported_entry(self):
        with pytest.raises(TypeError, match="Unsupported test entry"):
            read_tests([42])


class TestReadTestFile:
    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("# nothing\n", encoding="utf-8")
        assert read_test_file(path) == []

    def test_not_a_list(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("vars: {}\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must contain a list"):
            read_test_file(path)
