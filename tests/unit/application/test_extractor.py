"""Tests for the public Extractor / select entry points."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from xselect import (
    ATTRIBUTE_AT_PATTERN,
    ATTRIBUTE_BRACE_PATTERN,
    BUILTIN_FILTERS,
    Extractor,
    SchemaError,
    SelectOptions,
    build_options,
    select,
)


class TestBuildOptions:
    def test_none_gives_defaults(self) -> None:
        options = build_options()
        assert options.filters == {}
        assert not options.has_selector_hook
        assert not options.has_object_hook

    def test_bare_mapping_is_filter_registry(self) -> None:
        options = build_options({"trim": str.strip})
        assert options.filters == {"trim": str.strip}

    def test_mapping_with_option_keys(self) -> None:
        options = build_options({"filters": {"trim": str.strip}, "rfilters": r"\s*%\s*"})
        assert options.filters == {"trim": str.strip}
        assert options.filter_separator.pattern == r"\s*%\s*"

    def test_options_instance_passthrough(self) -> None:
        options = SelectOptions()
        assert build_options(options) is options

    def test_overrides_applied_to_instance(self) -> None:
        options = SelectOptions(filters={"trim": str.strip})
        merged = build_options(options, argument_separator=",")
        assert merged.argument_separator == ","
        assert merged.filters == {"trim": str.strip}
        assert options.argument_separator == ":"

    def test_invalid_pattern_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_options(selector_pattern="([unclosed")


class TestCustomSyntax:
    def test_custom_filter_separator(self, filters) -> None:
        extract = Extractor(
            '<a href="http://mat.io"></a>', {"filters": filters, "rfilters": r"\s*%\s*"}
        )
        assert extract("a[href] % href % uppercase") == "MAT.IO"

    def test_brace_attribute_syntax(self) -> None:
        extract = Extractor(
            '<a href="http://mat.io"></a>', selector_pattern=ATTRIBUTE_BRACE_PATTERN
        )
        assert extract("a{href}") == "http://mat.io"

    def test_at_attribute_syntax(self) -> None:
        extract = Extractor('<a href="mat.io"></a>', rselector=ATTRIBUTE_AT_PATTERN)
        assert extract("a@href") == "mat.io"

    def test_custom_argument_separator(self) -> None:
        extract = Extractor(
            '<p>a-b-c</p>', filters=BUILTIN_FILTERS, argument_separator="="
        )
        assert extract("p | replace=-=+") == "a+b+c"


class TestSchemaErrors:
    def test_unsupported_schema_type(self) -> None:
        with pytest.raises(SchemaError):
            Extractor("<p></p>")(42)

    def test_nested_list(self) -> None:
        with pytest.raises(SchemaError):
            Extractor("<p></p>")([["p"]])


class TestSelect:
    def test_one_shot(self) -> None:
        html = '<div class="item"><a href="http://x.io">x</a></div>'
        assert select(html, [{"$root": ".item", "link": "a[href]"}]) == [
            {"link": "http://x.io"}
        ]

    def test_with_builtin_filters(self) -> None:
        assert select("<p> 1,234 </p>", "p | int", filters=BUILTIN_FILTERS) == 1234

    def test_alternate_parser(self) -> None:
        assert select("<p>x</p>", "p", parser="html.parser") == "x"


class TestEndToEnd:
    def test_item_links(self) -> None:
        extract = Extractor(
            '<header><div class="item"><a href="http://x.io">x</a></div>'
            '<div class="item"><a href="http://y.io">y</a></div></header>'
        )
        assert extract([{"$root": ".item", "link": "a[href]"}]) == [
            {"link": "http://x.io"},
            {"link": "http://y.io"},
        ]

    def test_heading_anchor_zip(self) -> None:
        extract = Extractor(
            '<h2>One</h2><a href="/1">first</a><h2>Two</h2><a href="/2">second</a>'
        )
        assert extract([{"title": "h2", "href": "a[href]"}]) == [
            {"title": "One", "href": "/1"},
            {"title": "Two", "href": "/2"},
        ]
