"""Schema interpreter.

Walks a compiled schema and the document in lockstep:

- ``StringSelector``  -> first match rendered (singular) or every match
  rendered (plural, inside a list).
- ``FieldMapping``    -> dict of resolved fields; ``None`` values are omitted.
- ``ArrayOf(str)``    -> all matches in the scope.
- ``ArrayOf(dict)``   -> one record per ``$root`` match, or, without a
  ``$root``, per-field columns zipped into records by position.
- ``ArrayConcat``     -> every part resolved as above, results concatenated.

Absence is ``None`` everywhere and never raises.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog
from bs4 import Tag

from xselect.domain.errors import SchemaError
from xselect.domain.schema import (
    ArrayConcat,
    ArrayOf,
    FieldMapping,
    SchemaNode,
    StringSelector,
    compile_schema,
)
from xselect.domain.selector import ParsedSelector
from xselect.infrastructure.config.schema import SelectOptions
from xselect.infrastructure.html.document import Scope
from xselect.infrastructure.html.render import render
from xselect.infrastructure.parsing.selector_parser import SelectorParser

log = structlog.get_logger(__name__)

Column = Sequence[Any]


def zip_fields_to_records(
    columns: Sequence[tuple[str, Column]],
) -> list[dict[str, Any]]:
    """Group per-field columns into records by position.

    Record ``i`` takes value ``i`` of every column, in column order. Columns
    shorter than the longest one are padded with absence, and absent values
    are omitted from the record rather than truncating the output::

        >>> zip_fields_to_records([("a", ["x", "y"]), ("b", ["1"])])
        [{'a': 'x', 'b': '1'}, {'a': 'y'}]

    The output always has as many records as the longest column, even when
    some (or all) of them end up empty.
    """
    length = max((len(values) for _, values in columns), default=0)

    records: list[dict[str, Any]] = []
    for i in range(length):
        record: dict[str, Any] = {}
        for name, values in columns:
            if i < len(values) and values[i] is not None:
                record[name] = values[i]
        records.append(record)
    return records


def _is_empty_record(value: Any) -> bool:
    return value is None or (isinstance(value, Mapping) and not value)


class SchemaInterpreter:
    """Resolves schemas against one document.

    Holds no per-call state: the same interpreter may resolve any number of
    schemas, and repeated calls yield equal results.
    """

    def __init__(self, document: Tag, options: SelectOptions | None = None):
        self.document = document
        self.options = options or SelectOptions()
        self.parser = SelectorParser(
            filters=self.options.filters,
            selector_pattern=self.options.selector_pattern,
            filter_separator=self.options.filter_separator,
            argument_separator=self.options.argument_separator,
        )

    def resolve(self, schema: Any, scope: Scope | Tag | None = None) -> Any:
        node = compile_schema(schema)
        root = Scope.of(self.document if scope is None else scope)
        return self._resolve(node, root)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _resolve(self, node: SchemaNode, scope: Scope) -> Any:
        if isinstance(node, StringSelector):
            return self._resolve_string(node, scope)
        if isinstance(node, FieldMapping):
            return self._resolve_mapping(node, scope)
        if isinstance(node, ArrayOf):
            return self._resolve_array(node, scope)
        if isinstance(node, ArrayConcat):
            return self._resolve_concat(node, scope)
        raise SchemaError(f"Unknown schema node: {type(node).__name__}")

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _resolve_string(self, node: StringSelector, scope: Scope) -> Any:
        parsed = self.parser.parse(node.expression)

        if self.options.has_selector_hook:
            outcome = self.options.selector_hook(scope, parsed, self.options)
            if outcome.short_circuits:
                return outcome.content
            parsed = outcome.value

        element = self._find_one(scope, parsed)
        if element is None:
            return None
        return render(element, parsed)

    def _resolve_string_many(self, node: StringSelector, scope: Scope) -> list[Any]:
        parsed = self.parser.parse(node.expression)
        return [render(el, parsed) for el in self._find_many(scope, parsed)]

    @staticmethod
    def _find_one(scope: Scope, parsed: ParsedSelector) -> Tag | None:
        # No selector text ("[class]"): read off the scope element itself.
        if parsed.selector is None:
            return scope[0] if scope else None
        return scope.find_first(parsed.selector)

    @staticmethod
    def _find_many(scope: Scope, parsed: ParsedSelector) -> Scope:
        if parsed.selector is None:
            return scope
        return scope.find_all(parsed.selector)

    # ------------------------------------------------------------------
    # Mappings
    # ------------------------------------------------------------------

    def _resolve_mapping(self, node: FieldMapping, scope: Scope) -> Any:
        if self.options.has_object_hook:
            outcome = self.options.object_hook(scope, node.source, self.options)
            if outcome.short_circuits:
                return outcome.content
            if outcome.value is not node.source:
                rewritten = compile_schema(outcome.value)
                if not isinstance(rewritten, FieldMapping):
                    return self._resolve(rewritten, scope)
                node = rewritten

        if node.root:
            match = scope.find_first(node.root)
            if match is None:
                log.debug("root_no_match", root=node.root)
            scope = Scope.of(match)

        return self._fill(node, scope)

    def _fill(self, node: FieldMapping, scope: Scope) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name, child in node.fields:
            value = self._resolve(child, scope)
            if value is not None:
                out[name] = value
        return out

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _resolve_array(self, node: ArrayOf, scope: Scope) -> list[Any]:
        item = node.item

        if isinstance(item, StringSelector):
            return [v for v in self._resolve_string_many(item, scope) if v is not None]

        if item.root:
            return [
                record
                for record in self._records_per_root(item, scope)
                if not _is_empty_record(record)
            ]

        columns = [(name, self._column(child, scope)) for name, child in item.fields]
        return zip_fields_to_records(columns)

    def _resolve_concat(self, node: ArrayConcat, scope: Scope) -> list[Any]:
        out: list[Any] = []
        for part in node.parts:
            out.extend(self._resolve_array(part, scope))
        return out

    def _records_per_root(self, node: FieldMapping, scope: Scope) -> list[Any]:
        """One record per ``$root`` match, each resolved with that match as scope."""
        fields = node.without_root()
        return [
            self._resolve_mapping(fields, Scope.of(el))
            for el in scope.find_all(node.root)
        ]

    def _column(self, node: SchemaNode, scope: Scope) -> list[Any]:
        """Resolve one field of a root-less record list in plural mode."""
        if isinstance(node, StringSelector):
            return self._resolve_string_many(node, scope)

        if isinstance(node, FieldMapping):
            if node.root:
                records = self._records_per_root(node, scope)
            else:
                records = self._resolve_array(ArrayOf(node), scope)
            return [None if _is_empty_record(r) else r for r in records]

        # A list of matches per record cannot be aligned by position.
        log.debug("unalignable_field", node=repr(node))
        return []
