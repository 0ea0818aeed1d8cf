"""Bundled filter library.

Filters take the rendered value first and literal string arguments after
it. They pass ``None`` through untouched (except ``default``) so a missing
attribute stays missing instead of raising.
"""

from __future__ import annotations

import functools
import re
from typing import Any, Callable
from urllib.parse import urljoin

_SIZE_RE = re.compile(r"([\d.]+)\s*([KMGT]?I?B)")
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_SIZE_MULTIPLIERS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
}


def _text_filter(fn: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(fn)
    def wrapper(value: Any, *args: str) -> Any:
        if value is None:
            return None
        return fn(str(value), *args)

    return wrapper


@_text_filter
def trim(value: str) -> str:
    return value.strip()


@_text_filter
def squish(value: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return _WHITESPACE_RE.sub(" ", value).strip()


@_text_filter
def upper(value: str) -> str:
    return value.upper()


@_text_filter
def lower(value: str) -> str:
    return value.lower()


def to_int(value: Any) -> int | None:
    """Keep the digits of *value* and convert them to int.

    Handles various formats:
        - None → None
        - int → int (passthrough)
        - "1,234" → 1234
        - "1 234" → 1234
        - "" / "abc" → None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    digits = "".join(ch for ch in str(value) if ch.isdigit())
    if not digits:
        return None
    return int(digits)


def to_bytes(value: Any) -> int | None:
    """Parse a human size to bytes.

    Supports formats:
        - "1234" (raw bytes)
        - "4.5 GB", "500 MB", "1.2 TB"
        - "700 MiB"

    Returns None when *value* is not a size.
    """
    if value is None:
        return None

    text = str(value).strip()
    if text.isdigit():
        return int(text)

    match = _SIZE_RE.search(text.upper())
    if not match:
        return None

    try:
        amount = float(match.group(1))
    except ValueError:
        return None
    unit = match.group(2).replace("I", "")
    return int(amount * _SIZE_MULTIPLIERS.get(unit, 1))


@_text_filter
def split(value: str, separator: str = " ") -> list[str]:
    return value.split(separator)


@_text_filter
def replace(value: str, old: str, new: str = "") -> str:
    return value.replace(old, new)


@_text_filter
def prefix(value: str, text: str = "") -> str:
    return text + value


@_text_filter
def suffix(value: str, text: str = "") -> str:
    return value + text


def default(value: Any, fallback: str = "") -> Any:
    """Substitute *fallback* for a missing or empty value."""
    if value is None or value == "":
        return fallback
    return value


@_text_filter
def absolute_url(value: str, base: str = "") -> str:
    """Resolve against *base*; quote URLs in expressions: urljoin:'https://x.io/'."""
    return urljoin(base, value) if base else value


@_text_filter
def strip_scheme(value: str) -> str:
    return _SCHEME_RE.sub("", value)


@_text_filter
def secure(value: str) -> bool:
    """True if the value is an https:// URL."""
    return value.lower().startswith("https://")


BUILTIN_FILTERS: dict[str, Callable[..., Any]] = {
    "trim": trim,
    "squish": squish,
    "upper": upper,
    "uppercase": upper,
    "lower": lower,
    "lowercase": lower,
    "int": to_int,
    "bytes": to_bytes,
    "split": split,
    "replace": replace,
    "prefix": prefix,
    "suffix": suffix,
    "default": default,
    "urljoin": absolute_url,
    "strip_scheme": strip_scheme,
    "secure": secure,
}
