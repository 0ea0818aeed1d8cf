"""Field expression parser.

Grammar (default patterns)::

    expression  := field_selector ( "|" invocation )*
    field       := [ css_selector ] [ "[" attribute "]" ]
    invocation  := name ( ":" argument )*
    argument    := bare | "'" quoted "'" | '"' quoted '"'

The filter separator and the selector/attribute split are regular
expressions supplied by :class:`SelectOptions`; the argument separator is a
plain string handled by :func:`split_invocation`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable

import structlog

from xselect.domain.selector import FilterInvocation, ParsedSelector
from xselect.infrastructure.config.schema import (
    DEFAULT_ARGUMENT_SEPARATOR,
    DEFAULT_FILTER_SEPARATOR,
    DEFAULT_SELECTOR_PATTERN,
)
from xselect.infrastructure.filters.pipeline import resolve_formatters

log = structlog.get_logger(__name__)

_QUOTES = frozenset({"'", '"'})


def split_invocation(
    text: str, separator: str = DEFAULT_ARGUMENT_SEPARATOR
) -> FilterInvocation:
    """Split ``name:arg:'quoted:arg'`` into a :class:`FilterInvocation`.

    Quoted arguments may contain the separator; quotes are removed. An
    unterminated quote runs to the end of the text.
    """
    parts: list[str] = []
    buf: list[str] = []
    quote: str | None = None
    i = 0
    n = len(text)
    sep_len = len(separator)

    while i < n:
        ch = text[i]
        if quote is not None:
            if ch == quote:
                quote = None
            else:
                buf.append(ch)
            i += 1
        elif ch in _QUOTES and not "".join(buf).strip():
            # Quotes only open at the start of an argument.
            buf.clear()
            quote = ch
            i += 1
        elif text.startswith(separator, i):
            parts.append("".join(buf))
            buf.clear()
            i += sep_len
        else:
            buf.append(ch)
            i += 1
    parts.append("".join(buf))

    name = parts[0].strip()
    return FilterInvocation(name=name, args=tuple(parts[1:]))


class SelectorParser:
    """Parses field expressions into :class:`ParsedSelector` objects.

    Results are memoised per expression; a parser is bound to one filter
    registry and one set of patterns.
    """

    def __init__(
        self,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        selector_pattern: re.Pattern[str] | str = DEFAULT_SELECTOR_PATTERN,
        filter_separator: re.Pattern[str] | str = DEFAULT_FILTER_SEPARATOR,
        argument_separator: str = DEFAULT_ARGUMENT_SEPARATOR,
    ):
        self.filters = dict(filters or {})
        self.selector_pattern = re.compile(selector_pattern)
        self.filter_separator = re.compile(filter_separator)
        self.argument_separator = argument_separator
        self._cache: dict[str, ParsedSelector] = {}

    def parse(self, expression: str) -> ParsedSelector:
        cached = self._cache.get(expression)
        if cached is not None:
            return cached

        parsed = self._parse(expression)
        self._cache[expression] = parsed
        return parsed

    def _parse(self, expression: str) -> ParsedSelector:
        segments = self.filter_separator.split(expression.strip())
        field, invocations_raw = segments[0], segments[1:]

        m = self.selector_pattern.match(field)
        if m is None:
            # Unparseable field selector: use it verbatim, no attribute, no filters.
            log.debug("selector_unparsed", expression=expression)
            return ParsedSelector(
                selector=field.strip() or None, expression=expression
            )

        selector = (m.group(1) or "").strip() or None
        attribute = (m.group(2) or "").strip() or None

        invocations = [
            split_invocation(raw, self.argument_separator)
            for raw in invocations_raw
            if raw.strip()
        ]
        formatters = resolve_formatters(invocations, self.filters)
        if len(formatters) != len(invocations):
            known = {f.name for f in formatters}
            log.debug(
                "filter_unknown",
                expression=expression,
                filters=[i.name for i in invocations if i.name not in known],
            )

        return ParsedSelector(
            selector=selector,
            attribute=attribute,
            formatters=tuple(formatters),
            expression=expression,
        )
