"""Tests for promptgrid.evaluation.templating - rendering and prompt filters."""

from __future__ import annotations

import pytest

from promptgrid.evaluation.templating import (
    check_prompt_filters,
    prompt_filter_names,
    read_filters,
    render_prompt,
)


class TestRenderPrompt:
    def test_substitutes_vars(self):
        assert render_prompt("Hello {{ name }}!", {"name": "Ada"}) == "Hello Ada!"

    def test_no_spaces(self):
        assert render_prompt("{{name}}", {"name": "Ada"}) == "Ada"

    def test_dotted_lookup(self):
        assert render_prompt("{{ user.name }}", {"user": {"name": "Ada"}}) == "Ada"

    def test_unknown_var_renders_empty(self):
        assert render_prompt("[{{ missing }}]", {}) == "[]"

    def test_non_string_values(self):
        assert render_prompt("n={{ n }}", {"n": 3}) == "n=3"

    def test_filters_chain(self):
        filters = {"upper": str.upper, "exclaim": lambda v: f"{v}!"}
        assert render_prompt("{{ w | upper | exclaim }}", {"w": "hi"}, filters) == "HI!"

    def test_unknown_filter(self):
        with pytest.raises(ValueError, match="Unknown prompt filter 'nope'"):
            render_prompt("{{ w | nope }}", {"w": "hi"})

    def test_json_prompt_braces_untouched(self):
        template = '[{"role":"user","content":"{{ q }}"}]'
        assert render_prompt(template, {"q": "why"}) == '[{"role":"user","content":"why"}]'

    def test_text_without_placeholders(self):
        assert render_prompt("plain text", None) == "plain text"


class TestReadFilters:
    def test_loads_from_file(self, tmp_path, monkeypatch):
        (tmp_path / "filters.py").write_text(
            "def shout(v):\n    return str(v).upper()\n\ndef whisper(v):\n    return str(v).lower()\n"
        )
        monkeypatch.chdir(tmp_path)
        filters = read_filters({"shout": "filters.py", "quiet": "filters.py:whisper"})
        assert filters["shout"]("a") == "A"
        assert filters["quiet"]("B") == "b"

    def test_dotted_path(self):
        filters = read_filters({"dump": "json.dumps"})
        assert filters["dump"]([1]) == "[1]"

    def test_non_callable(self, tmp_path, monkeypatch):
        (tmp_path / "filters.py").write_text("shout = 3\n")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(TypeError, match="is not callable"):
            read_filters({"shout": "filters.py"})

    def test_empty(self):
        assert read_filters({}) == {}


class TestCheckPromptFilters:
    def test_collects_names_in_order(self):
        template = "{{ a | upper }} and {{ b | trim | exclaim }} and {{ c }}"
        assert prompt_filter_names(template) == ["upper", "trim", "exclaim"]

    def test_known_filters_pass(self):
        check_prompt_filters(["{{ w | upper }}", "plain"], {"upper": str.upper})

    def test_unknown_filter_raises(self):
        with pytest.raises(ValueError, match="Unknown prompt filter 'nope'"):
            check_prompt_filters(["{{ x }}", "{{ x | nope }}"], {})
