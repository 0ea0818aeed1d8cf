"""Declarative HTML-to-data extraction.

Describe the data you want as plain Python values and let the interpreter
walk the document::

    >>> from xselect import Extractor
    >>> extract = Extractor('<div class="item"><a href="http://x.io">x</a></div>')
    >>> extract([{"$root": ".item", "link": "a[href]"}])
    [{'link': 'http://x.io'}]
"""

from __future__ import annotations

from xselect.application.extractor import Extractor, build_options, select
from xselect.application.interpreter import SchemaInterpreter, zip_fields_to_records
from xselect.domain.errors import ConfigError, SchemaError, XSelectError
from xselect.domain.ports.hooks import HookOutcome, ObjectHook, SelectorHook
from xselect.domain.schema import compile_schema
from xselect.domain.selector import ParsedSelector
from xselect.infrastructure.config.schema import (
    ATTRIBUTE_AT_PATTERN,
    ATTRIBUTE_BRACE_PATTERN,
    SelectOptions,
)
from xselect.infrastructure.filters.builtin import BUILTIN_FILTERS
from xselect.infrastructure.html.document import Scope, load_document

__version__ = "0.1.0"

__all__ = [
    "ATTRIBUTE_AT_PATTERN",
    "ATTRIBUTE_BRACE_PATTERN",
    "BUILTIN_FILTERS",
    "ConfigError",
    "Extractor",
    "HookOutcome",
    "ObjectHook",
    "ParsedSelector",
    "SchemaError",
    "SchemaInterpreter",
    "Scope",
    "SelectOptions",
    "SelectorHook",
    "XSelectError",
    "build_options",
    "compile_schema",
    "load_document",
    "select",
    "zip_fields_to_records",
]
