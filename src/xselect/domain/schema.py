"""Schema node types.

Callers describe the shape of the data they want with plain Python values:

- ``"a[href]"``                         -> :class:`StringSelector`
- ``{"$root": ".item", "link": "a"}``   -> :class:`FieldMapping`
- ``["li"]`` / ``[{"title": "h2"}]``    -> :class:`ArrayOf`
- ``[]`` / ``["h1", "h2"]``             -> :class:`ArrayConcat`

:func:`compile_schema` turns such a value into a tree of frozen nodes so the
interpreter dispatches over a closed set of types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from xselect.domain.errors import SchemaError

ROOT_KEY = "$root"


@dataclass(frozen=True)
class StringSelector:
    expression: str


@dataclass(frozen=True)
class FieldMapping:
    fields: tuple[tuple[str, SchemaNode], ...]
    root: str | None = None
    # Raw mapping as written by the caller; handed to object hooks.
    source: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def without_root(self) -> FieldMapping:
        source = {k: v for k, v in self.source.items() if k != ROOT_KEY}
        return FieldMapping(fields=self.fields, root=None, source=source)


@dataclass(frozen=True)
class ArrayOf:
    item: Union[StringSelector, FieldMapping]


@dataclass(frozen=True)
class ArrayConcat:
    """Several list schemas whose results are concatenated in order."""

    parts: tuple[ArrayOf, ...] = ()


SchemaNode = Union[StringSelector, FieldMapping, ArrayOf, ArrayConcat]


def compile_schema(raw: Any) -> SchemaNode:
    """Compile a raw schema value into schema nodes.

    Already-compiled nodes are returned unchanged.

    Raises:
        SchemaError: if *raw* (or any nested value) is not a string, a
            mapping or a list of those (lists do not nest).
    """
    if isinstance(raw, (StringSelector, FieldMapping, ArrayOf, ArrayConcat)):
        return raw

    if isinstance(raw, str):
        return StringSelector(raw)

    if isinstance(raw, Mapping):
        return _compile_mapping(raw)

    if isinstance(raw, (list, tuple)):
        arrays = tuple(_compile_array_item(item) for item in raw)
        if len(arrays) == 1:
            return arrays[0]
        # [] and ["a", "b"]: every item's results, concatenated.
        return ArrayConcat(arrays)

    raise SchemaError(f"Unsupported schema value: {type(raw).__name__}")


def _compile_array_item(raw: Any) -> ArrayOf:
    item = compile_schema(raw)
    if isinstance(item, (ArrayOf, ArrayConcat)):
        raise SchemaError("Nested list schemas are not supported")
    return ArrayOf(item)


def _compile_mapping(raw: Mapping[Any, Any]) -> FieldMapping:
    root = raw.get(ROOT_KEY)
    if root is not None and not isinstance(root, str):
        raise SchemaError(
            f"{ROOT_KEY} must be a selector string, got {type(root).__name__}"
        )

    fields: list[tuple[str, SchemaNode]] = []
    for key, value in raw.items():
        if key == ROOT_KEY:
            continue
        if not isinstance(key, str):
            raise SchemaError(f"Field names must be strings, got {key!r}")
        fields.append((key, compile_schema(value)))

    return FieldMapping(fields=tuple(fields), root=root or None, source=dict(raw))
