from __future__ import annotations

from .document import Scope, load_document
from .render import render

__all__ = ["Scope", "load_document", "render"]
