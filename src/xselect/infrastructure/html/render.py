"""Render one matched element for a parsed selector."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup, Tag

from xselect.domain.selector import ParsedSelector
from xselect.infrastructure.filters.pipeline import apply_filters

# The document node itself has no tag; report it the way DOM libraries do.
ROOT_TAG_NAME = "root"

ELEMENT_NODE = 1
DOCUMENT_NODE = 9


def _tag_name(element: Tag) -> str:
    if isinstance(element, BeautifulSoup):
        return ROOT_TAG_NAME
    return element.name


def intrinsic_property(element: Tag, name: str) -> Any:
    if name in ("tagName", "localName"):
        return _tag_name(element)
    if name == "nodeName":
        return _tag_name(element).upper()
    if name == "nodeType":
        return DOCUMENT_NODE if isinstance(element, BeautifulSoup) else ELEMENT_NODE
    return None


def attribute_value(element: Tag, name: str) -> str | None:
    value = element.get(name)
    if value is None:
        return None
    # Multi-valued attributes (class, rel, ...) come back as lists.
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def render_raw(element: Tag, parsed: ParsedSelector) -> Any:
    if parsed.renders_text:
        return element.get_text()
    if parsed.renders_html:
        return element.decode_contents()
    if parsed.renders_intrinsic:
        return intrinsic_property(element, parsed.attribute)
    return attribute_value(element, parsed.attribute)


def render(element: Tag, parsed: ParsedSelector) -> Any:
    """Render *element* and run the filter pipeline.

    Returns None when the value is absent (missing attribute, or a filter
    returned None).
    """
    return apply_filters(render_raw(element, parsed), parsed.formatters)
