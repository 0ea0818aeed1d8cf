"""Document loading and query scopes on top of BeautifulSoup."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog
from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

log = structlog.get_logger(__name__)

DEFAULT_PARSER = "lxml"


def load_document(
    markup: str | bytes | BeautifulSoup | Tag | None, parser: str = DEFAULT_PARSER
) -> BeautifulSoup | Tag:
    """Parse *markup* into a queryable tree.

    Already-parsed trees (``BeautifulSoup`` or ``Tag``) are returned
    unchanged, so loading is idempotent.
    """
    if isinstance(markup, Tag):
        return markup
    return BeautifulSoup(markup or "", parser)


class Scope:
    """An ordered, de-duplicated set of elements bounding a query.

    An empty scope is valid: every lookup on it finds nothing.
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: Iterable[Tag] = ()):
        seen: set[int] = set()
        unique: list[Tag] = []
        for el in elements:
            if id(el) not in seen:
                seen.add(id(el))
                unique.append(el)
        self._elements: tuple[Tag, ...] = tuple(unique)

    @classmethod
    def of(cls, element: Scope | Tag | None) -> Scope:
        if element is None:
            return cls()
        if isinstance(element, Scope):
            return element
        return cls((element,))

    @property
    def elements(self) -> tuple[Tag, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Tag:
        return self._elements[index]

    def __repr__(self) -> str:
        names = ", ".join(el.name or "?" for el in self._elements[:5])
        more = "..." if len(self._elements) > 5 else ""
        return f"Scope([{names}{more}])"

    def find_all(self, selector: str) -> Scope:
        """All descendants of every scope element matching *selector*.

        Matches are kept in document order per scope element.
        """
        found: list[Tag] = []
        try:
            for el in self._elements:
                found.extend(el.select(selector))
        except SelectorSyntaxError as e:
            log.warning("selector_invalid", selector=selector, error=str(e))
            return Scope()
        return Scope(found)

    def find_first(self, selector: str) -> Tag | None:
        """First descendant matching *selector*, or None."""
        try:
            for el in self._elements:
                match = el.select_one(selector)
                if match is not None:
                    return match
        except SelectorSyntaxError as e:
            log.warning("selector_invalid", selector=selector, error=str(e))
        return None
