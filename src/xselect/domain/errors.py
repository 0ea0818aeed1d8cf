from __future__ import annotations


class XSelectError(Exception):
    """Base error for xselect."""


class SchemaError(XSelectError, TypeError):
    """Raised when a raw schema cannot be compiled into schema nodes."""


class ConfigError(XSelectError, ValueError):
    """Raised when a configuration file or override set is invalid."""
