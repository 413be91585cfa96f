"""Tests for HTML fragment formatting utilities."""

from __future__ import annotations

from collected.utils.formatting import (
    description_list,
    escape_text,
    format_duration,
    pre_block,
    render_error_html,
)


class TestDescriptionList:
    def test_pairs(self):
        html = description_list([("name", "value")])
        assert html.startswith('<dl class="')
        assert '<dt class="font-bold">name</dt><dd class="mb-2">value</dd>' in html
        assert html.endswith("</dl>")

    def test_escapes_keys_and_values(self):
        html = description_list([('<b>"k"', "<i>v & w</i>")])
        assert "&lt;b&gt;&quot;k&quot;" in html
        assert "&lt;i&gt;v &amp; w&lt;/i&gt;" in html

    def test_empty(self):
        assert description_list([]).count("<dt") == 0


class TestPreBlock:
    def test_plain(self):
        assert pre_block("a < b") == "<pre>a &lt; b</pre>"

    def test_class(self):
        assert pre_block("x", css_class="wrap") == '<pre class="wrap">x</pre>'

    def test_quotes_untouched(self):
        assert escape_text('"json"') == '"json"'


class TestRenderErrorHTML:
    def test_escaped(self):
        html = render_error_html("Unknown command ['<x>']")
        assert "Error: Unknown command [&#x27;&lt;x&gt;&#x27;]" in html
        assert html.startswith("<div")


class TestFormatDuration:
    def test_milliseconds(self):
        assert format_duration(500) == "500ms"

    def test_seconds(self):
        assert format_duration(2500) == "2.5s"

    def test_minutes(self):
        assert format_duration(125000) == "2m 5s"

    def test_zero(self):
        assert format_duration(0) == "0ms"
