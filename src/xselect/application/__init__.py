from .extractor import Extractor, build_options, select
from .interpreter import SchemaInterpreter, zip_fields_to_records

__all__ = [
    "Extractor",
    "SchemaInterpreter",
    "build_options",
    "select",
    "zip_fields_to_records",
]
