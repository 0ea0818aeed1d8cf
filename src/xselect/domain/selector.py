"""Parsed field expressions.

A field expression such as ``"h2.title[data-id] | trim | split:-"`` is
parsed into a :class:`ParsedSelector`: the CSS part, the bracketed
attribute and the resolved filter chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable

Filter = Callable[..., Any]

# Reserved attribute name that renders the element's inner markup.
HTML_ATTRIBUTE = "html"

# Names read from the element itself instead of its attribute map.
INTRINSIC_PROPERTIES = frozenset({"tagName", "nodeName", "nodeType", "localName"})


@dataclass(frozen=True)
class FilterInvocation:
    """A filter reference as written in the expression, before resolution."""

    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class Formatter:
    """A filter invocation bound to its registered function."""

    name: str
    args: tuple[str, ...]
    fn: Filter = field(compare=False, repr=False)

    def __call__(self, value: Any) -> Any:
        return self.fn(value, *self.args)


@dataclass(frozen=True)
class ParsedSelector:
    selector: str | None = None
    attribute: str | None = None
    formatters: tuple[Formatter, ...] = ()
    expression: str = ""

    @property
    def renders_text(self) -> bool:
        return self.attribute is None

    @property
    def renders_html(self) -> bool:
        return self.attribute == HTML_ATTRIBUTE

    @property
    def renders_intrinsic(self) -> bool:
        return self.attribute in INTRINSIC_PROPERTIES

    def with_selector(self, selector: str | None) -> ParsedSelector:
        """Return a copy pointing at a different CSS selector."""
        return replace(self, selector=selector)
