"""Public extraction entry points."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup, Tag

from xselect.application.interpreter import SchemaInterpreter
from xselect.infrastructure.config.schema import SelectOptions
from xselect.infrastructure.html.document import DEFAULT_PARSER, Scope, load_document

_OPTION_KEYS: frozenset[str] = frozenset(
    {
        *SelectOptions.model_fields,
        "rselector",
        "rfilters",
        "selector_handler",
        "object_handler",
    }
)


def build_options(
    options: SelectOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> SelectOptions:
    """Normalise the accepted option shapes into :class:`SelectOptions`.

    *options* may be a ``SelectOptions``, a mapping of option names, or a
    bare filter registry (``{"trim": fn, ...}``).
    """
    if isinstance(options, SelectOptions):
        if not overrides:
            return options
        data: dict[str, Any] = {
            name: getattr(options, name) for name in SelectOptions.model_fields
        }
    elif options is None:
        data = {}
    elif _OPTION_KEYS.intersection(options):
        data = dict(options)
    else:
        data = {"filters": dict(options)}

    data.update(overrides)
    return SelectOptions.model_validate(data)


class Extractor:
    """Extract structured data from one HTML document.

    Example::

        extract = Extractor(html, filters={"trim": str.strip})
        extract([{"$root": ".item", "link": "a[href]", "title": "h2 | trim"}])
    """

    def __init__(
        self,
        html: str | bytes | BeautifulSoup | Tag | None = None,
        options: SelectOptions | Mapping[str, Any] | None = None,
        *,
        parser: str = DEFAULT_PARSER,
        **overrides: Any,
    ):
        self.document = load_document(html, parser=parser)
        self.options = build_options(options, **overrides)
        self.interpreter = SchemaInterpreter(self.document, self.options)

    def __call__(self, schema: Any, scope: Scope | Tag | None = None) -> Any:
        return self.interpreter.resolve(schema, scope)

    def __repr__(self) -> str:
        return f"Extractor(filters={sorted(self.options.filters)!r})"


def select(
    html: str | bytes | BeautifulSoup | Tag | None,
    schema: Any,
    *,
    parser: str = DEFAULT_PARSER,
    **options: Any,
) -> Any:
    """One-shot helper: ``Extractor(html, **options)(schema)``."""
    return Extractor(html, parser=parser, **options)(schema)
