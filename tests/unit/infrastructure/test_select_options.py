"""Tests for SelectOptions validation."""

from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from xselect.domain.ports.hooks import NOOP_OBJECT_HOOK, NOOP_SELECTOR_HOOK, HookOutcome
from xselect.infrastructure.config.schema import (
    DEFAULT_FILTER_SEPARATOR,
    DEFAULT_SELECTOR_PATTERN,
    SelectOptions,
)


def _hook(scope, value, options):
    return HookOutcome(value)


class TestDefaults:
    def test_patterns(self) -> None:
        options = SelectOptions()
        assert options.selector_pattern.pattern == DEFAULT_SELECTOR_PATTERN
        assert options.filter_separator.pattern == DEFAULT_FILTER_SEPARATOR
        assert options.argument_separator == ":"

    def test_hooks_are_noops(self) -> None:
        options = SelectOptions()
        assert options.selector_hook is NOOP_SELECTOR_HOOK
        assert options.object_hook is NOOP_OBJECT_HOOK
        assert not options.has_selector_hook
        assert not options.has_object_hook

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            SelectOptions().argument_separator = ","


class TestPatterns:
    def test_string_compiled(self) -> None:
        options = SelectOptions(filter_separator=r"\s*%\s*")
        assert isinstance(options.filter_separator, re.Pattern)

    def test_compiled_pattern_accepted(self) -> None:
        pattern = re.compile(r"^(\S+)?(?:@(\S+))?$")
        assert SelectOptions(selector_pattern=pattern).selector_pattern is pattern

    def test_invalid_regex(self) -> None:
        with pytest.raises(ValidationError, match="Invalid regular expression"):
            SelectOptions(filter_separator="(")

    def test_selector_pattern_needs_two_groups(self) -> None:
        with pytest.raises(ValidationError, match="two groups"):
            SelectOptions(selector_pattern=r"^(.*)$")

    def test_empty_argument_separator(self) -> None:
        with pytest.raises(ValidationError):
            SelectOptions(argument_separator="")


class TestAliases:
    def test_legacy_names(self) -> None:
        options = SelectOptions.model_validate(
            {
                "rselector": r"^([^@]+)?(?:@(\S+))?$",
                "rfilters": r"\s*%\s*",
                "selector_handler": _hook,
                "object_handler": _hook,
            }
        )
        assert options.selector_pattern.pattern == r"^([^@]+)?(?:@(\S+))?$"
        assert options.filter_separator.pattern == r"\s*%\s*"
        assert options.selector_hook is _hook
        assert options.object_hook is _hook
        assert options.has_selector_hook
        assert options.has_object_hook


class TestHooks:
    def test_none_means_noop(self) -> None:
        options = SelectOptions(selector_hook=None, object_hook=None)
        assert options.selector_hook is NOOP_SELECTOR_HOOK
        assert options.object_hook is NOOP_OBJECT_HOOK

    def test_not_callable_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SelectOptions(selector_hook="nope")
