from __future__ import annotations

from .selector_parser import SelectorParser, split_invocation

__all__ = ["SelectorParser", "split_invocation"]
