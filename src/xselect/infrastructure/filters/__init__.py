"""Filter registry helpers and the bundled filter library."""

from __future__ import annotations

from .builtin import BUILTIN_FILTERS
from .pipeline import apply_filters, resolve_formatters

__all__ = ["BUILTIN_FILTERS", "apply_filters", "resolve_formatters"]
