"""Tests for parsed selector value objects."""

from __future__ import annotations

from xselect.domain.selector import Formatter, ParsedSelector


class TestParsedSelector:
    def test_no_attribute_renders_text(self) -> None:
        parsed = ParsedSelector(selector="a")
        assert parsed.renders_text
        assert not parsed.renders_html

    def test_html_attribute(self) -> None:
        parsed = ParsedSelector(selector="a", attribute="html")
        assert parsed.renders_html
        assert not parsed.renders_text

    def test_intrinsic_attribute(self) -> None:
        assert ParsedSelector(attribute="tagName").renders_intrinsic
        assert not ParsedSelector(attribute="href").renders_intrinsic

    def test_with_selector_copies(self) -> None:
        fmt = Formatter("upper", (), str.upper)
        parsed = ParsedSelector(selector="@x", attribute="href", formatters=(fmt,))
        moved = parsed.with_selector("a")
        assert moved.selector == "a"
        assert moved.attribute == "href"
        assert moved.formatters == (fmt,)
        assert parsed.selector == "@x"


class TestFormatter:
    def test_call_passes_args_after_value(self) -> None:
        fmt = Formatter("split", ("-",), lambda value, sep: value.split(sep))
        assert fmt("a-b") == ["a", "b"]

    def test_equality_ignores_function(self) -> None:
        assert Formatter("f", ("x",), str.upper) == Formatter("f", ("x",), str.lower)
