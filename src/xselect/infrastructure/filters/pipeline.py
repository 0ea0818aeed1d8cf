"""Filter resolution and application."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable

from xselect.domain.selector import FilterInvocation, Formatter


def resolve_formatters(
    invocations: Iterable[FilterInvocation],
    registry: Mapping[str, Callable[..., Any]],
) -> list[Formatter]:
    """Bind invocations to registered functions, dropping unknown names."""
    formatters: list[Formatter] = []
    for invocation in invocations:
        fn = registry.get(invocation.name)
        if fn is None:
            continue
        formatters.append(Formatter(invocation.name, invocation.args, fn))
    return formatters


def apply_filters(value: Any, formatters: Sequence[Formatter]) -> Any:
    """Left fold: ``g(f(value))`` for ``[f, g]``; empty pipeline is identity."""
    for formatter in formatters:
        value = formatter(value)
    return value
