from .errors import ConfigError, SchemaError, XSelectError
from .schema import (
    ROOT_KEY,
    ArrayConcat,
    ArrayOf,
    FieldMapping,
    SchemaNode,
    StringSelector,
    compile_schema,
)
from .selector import FilterInvocation, Formatter, ParsedSelector

__all__ = [
    "ROOT_KEY",
    "ArrayConcat",
    "ArrayOf",
    "ConfigError",
    "FieldMapping",
    "FilterInvocation",
    "Formatter",
    "ParsedSelector",
    "SchemaError",
    "SchemaNode",
    "StringSelector",
    "XSelectError",
    "compile_schema",
]
