"""Tests for selector and object hooks."""

from __future__ import annotations

from typing import Any, Mapping
from unittest.mock import MagicMock

import pytest

from xselect import Extractor, HookOutcome, ParsedSelector, Scope, SelectOptions


def _mytag_hook(
    scope: Scope, selector: ParsedSelector, options: SelectOptions
) -> HookOutcome[ParsedSelector]:
    if selector.selector == "mytag":
        return HookOutcome(selector, content="example")
    return HookOutcome(selector)


def _tag_object_hook(
    scope: Scope, mapping: Mapping[str, Any], options: SelectOptions
) -> HookOutcome[Mapping[str, Any]]:
    return HookOutcome(mapping, content=mapping.get("$tag"))


class TestSelectorHook:
    def test_short_circuit(self, filters) -> None:
        extract = Extractor(
            '<a href="http://mat.io"></a>', filters=filters, selector_hook=_mytag_hook
        )
        assert extract({"tag": "mytag", "normal": "a[href] | href"}) == {
            "tag": "example",
            "normal": "mat.io",
        }

    def test_legacy_option_name(self) -> None:
        extract = Extractor("<p></p>", {"selector_handler": _mytag_hook})
        assert extract("mytag") == "example"

    def test_rewrite_selector(self) -> None:
        def alias(scope, selector, options):
            if selector.selector == "@link":
                return HookOutcome(selector.with_selector("a"))
            return HookOutcome(selector)

        extract = Extractor('<a href="http://mat.io"></a>', selector_hook=alias)
        assert extract("@link[href]") == "http://mat.io"

    def test_receives_scope_and_options(self) -> None:
        spy = MagicMock(side_effect=lambda scope, selector, options: HookOutcome(selector))

        extract = Extractor("<p>x</p>", selector_hook=spy)
        assert extract("p") == "x"

        spy.assert_called_once()
        scope, selector, options = spy.call_args.args
        assert scope[0] is extract.document
        assert selector.selector == "p"
        assert options is extract.options

    def test_hook_errors_propagate(self) -> None:
        def broken(scope, selector, options):
            raise RuntimeError("boom")

        extract = Extractor("<p>x</p>", selector_hook=broken)
        with pytest.raises(RuntimeError, match="boom"):
            extract("p")

    def test_falsy_content_short_circuits(self) -> None:
        extract = Extractor(
            "<p>x</p>",
            selector_hook=lambda scope, sel, opts: HookOutcome(sel, content=False),
        )
        assert extract("p") is False


class TestObjectHook:
    def test_short_circuit(self, filters) -> None:
        extract = Extractor(
            '<a href="http://mat.io"></a>',
            filters=filters,
            object_hook=_tag_object_hook,
        )
        assert extract({"custom": {"$tag": "mytag"}, "normal": "a[href] | href"}) == {
            "custom": "mytag",
            "normal": "mat.io",
        }

    def test_rewrite_mapping(self) -> None:
        def add_field(scope, mapping, options):
            if "href" in mapping:
                return HookOutcome({**mapping, "text": "a"})
            return HookOutcome(mapping)

        extract = Extractor('<a href="http://mat.io">mat</a>', object_hook=add_field)
        assert extract({"href": "a[href]"}) == {"href": "http://mat.io", "text": "mat"}

    def test_rewrite_to_string_schema(self) -> None:
        def collapse(scope, mapping, options):
            return HookOutcome(mapping.get("$value", mapping))

        extract = Extractor('<a href="http://mat.io">mat</a>', object_hook=collapse)
        assert extract({"link": {"$value": "a[href]"}}) == {"link": "http://mat.io"}

    def test_called_per_record_with_root(self) -> None:
        scopes: list[Scope] = []

        def spy(scope, mapping, options):
            scopes.append(scope)
            return HookOutcome(mapping)

        extract = Extractor("<li>1</li><li>2</li>", object_hook=spy)
        assert extract([{"$root": "li", "n": "[tagName]"}]) == [{"n": "li"}, {"n": "li"}]
        assert [s[0].get_text() for s in scopes] == ["1", "2"]
