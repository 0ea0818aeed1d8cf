"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "xselect",
    "environment": "dev",
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "extraction": {
        "parser": "lxml",
        "builtin_filters": True,
    },
    "output": {
        "indent": 2,
    },
}
