"""Unit tests for html_render: Markup, escape_html, render_template.

Covers the single-pass escaping contract and ``${key}`` substitution,
including the literal pass-through of unknown placeholders.
"""

from __future__ import annotations

import html

import pytest

from scriptmark.export.errors import MalformedTemplateError
from scriptmark.export.html_render import Markup, escape_html, render_template


def _unescape(markup: str) -> str:
    """Invert escape_html for round-trip checks."""
    return html.unescape(markup.replace("<br>", "\n"))


class TestMarkup:
    """Tests for the Markup trusted-string marker."""

    def test_is_str_subclass(self) -> None:
        assert isinstance(Markup("x"), str)

    def test_escape_html_passthrough(self) -> None:
        """escape_html returns Markup values unchanged."""
        val = Markup("<b>already safe</b>")
        assert escape_html(val) is val


class TestEscapeHtml:
    """Tests for escape_html."""

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("&", "&amp;"),
            ("<", "&lt;"),
            (">", "&gt;"),
            ("\n", "<br>"),
        ],
        ids=["ampersand", "lt", "gt", "newline"],
    )
    def test_single_special_char(self, char: str, expected: str) -> None:
        assert escape_html(char) == expected

    def test_ampersand_example(self) -> None:
        assert escape_html("A & B") == "A &amp; B"

    def test_result_is_markup(self) -> None:
        assert isinstance(escape_html("plain"), Markup)

    def test_second_application_does_not_double_escape(self) -> None:
        """Escaping the escaped result again is a no-op."""
        once = escape_html("A & B")
        assert escape_html(once) == "A &amp; B"

    def test_plain_str_entity_is_escaped(self) -> None:
        """Raw text that happens to look like an entity is still text."""
        assert escape_html("&amp;") == "&amp;amp;"

    def test_replacement_output_not_rescanned(self) -> None:
        """The & in &lt; is never escaped a second time."""
        assert escape_html("<&>") == "&lt;&amp;&gt;"

    def test_carriage_return_passes_through(self) -> None:
        assert escape_html("a\r\nb") == "a\r<br>b"

    def test_other_text_unchanged(self) -> None:
        assert escape_html("JOHN (V.O.) \"Hi\" 'there'") == "JOHN (V.O.) \"Hi\" 'there'"

    @pytest.mark.parametrize(
        "text",
        [
            "Tom & Jerry",
            "<script>alert('x')</script>",
            "line one\nline two\n",
            "&lt; already looks escaped &gt;",
            "",
        ],
        ids=["ampersand", "script", "newlines", "entity-lookalike", "empty"],
    )
    def test_round_trip_lossless(self, text: str) -> None:
        assert _unescape(escape_html(text)) == text


class TestRenderTemplate:
    """Tests for ${key} substitution."""

    def test_spec_example(self) -> None:
        template = '<html><!-- ${tool-version} --><link href="${cssfile}">'
        result = render_template(
            template, {"tool-version": "2.0", "cssfile": "script.css"}
        )
        assert result == '<html><!-- 2.0 --><link href="script.css">'

    def test_unknown_placeholder_left_literal(self) -> None:
        assert render_template("a ${missing} b", {}) == "a ${missing} b"

    def test_values_are_not_escaped(self) -> None:
        assert render_template("${x}", {"x": "<b>&</b>"}) == "<b>&</b>"

    def test_repeated_placeholder(self) -> None:
        assert render_template("${a}-${a}", {"a": "z"}) == "z-z"

    def test_value_containing_placeholder_not_rescanned(self) -> None:
        assert render_template("${a}", {"a": "${b}", "b": "no"}) == "${b}"

    def test_bare_dollar_and_braces_untouched(self) -> None:
        text = "price: $5 and #id { color: red; }"
        assert render_template(text, {}) == text

    @pytest.mark.parametrize(
        "template",
        ["head ${unterminated", "${}", "${ spaced }", "${1abc}"],
        ids=["unterminated", "empty", "spaces", "leading-digit"],
    )
    def test_malformed_placeholder_raises(self, template: str) -> None:
        with pytest.raises(MalformedTemplateError):
            render_template(template, {})

    def test_malformed_error_reports_offset(self) -> None:
        with pytest.raises(MalformedTemplateError) as exc_info:
            render_template("abc ${oops", {})
        assert exc_info.value.position == 4
