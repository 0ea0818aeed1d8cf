"""Ports for caller-supplied resolution hooks.

Hooks let callers add pseudo-selectors (for example a tag that synthesises
a constant) without touching the interpreter. A hook receives the current
scope, the parsed selector or raw mapping and the active options, and
returns a :class:`HookOutcome`:

- ``content`` set (not ``None``): used as the resolved value as-is.
- otherwise: resolution continues with ``value``, which may be rewritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Mapping, Protocol, TypeVar

from xselect.domain.selector import ParsedSelector

if TYPE_CHECKING:
    from xselect.infrastructure.config.schema import SelectOptions
    from xselect.infrastructure.html.document import Scope

T = TypeVar("T")


@dataclass(frozen=True)
class HookOutcome(Generic[T]):
    value: T
    content: Any = None

    @property
    def short_circuits(self) -> bool:
        return self.content is not None


class SelectorHook(Protocol):
    """Intercepts singular string resolution."""

    def __call__(
        self, scope: Scope, selector: ParsedSelector, options: SelectOptions
    ) -> HookOutcome[ParsedSelector]: ...


class ObjectHook(Protocol):
    """Intercepts field-mapping resolution."""

    def __call__(
        self, scope: Scope, mapping: Mapping[str, Any], options: SelectOptions
    ) -> HookOutcome[Mapping[str, Any]]: ...


class NoopSelectorHook:
    def __call__(
        self, scope: Scope, selector: ParsedSelector, options: SelectOptions
    ) -> HookOutcome[ParsedSelector]:
        return HookOutcome(selector)


class NoopObjectHook:
    def __call__(
        self, scope: Scope, mapping: Mapping[str, Any], options: SelectOptions
    ) -> HookOutcome[Mapping[str, Any]]:
        return HookOutcome(mapping)


NOOP_SELECTOR_HOOK = NoopSelectorHook()
NOOP_OBJECT_HOOK = NoopObjectHook()
