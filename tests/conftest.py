"""Shared test fixtures for xselect test suite."""

from __future__ import annotations

import re
from typing import Any, Callable

import pytest
import structlog

from xselect import Extractor

# ---------------------------------------------------------------------------
# Fixture HTML
# ---------------------------------------------------------------------------

ITEMS_HTML = """\
<header>
  <div class="item">
    <a href="https://github.com/matthewmueller">github</a>
    <img src="github.png" />
    <div class="item-content">
      <h2>matthewmueller's github</h2>
      <section>matthewmueller's bio</section>
    </div>
    <ul class="item-tags">
      <li>a</li>
      <li>b</li>
      <li>c</li>
    </ul>
  </div>
  <div class="item">
    <a href="https://twitter.com/mattmueller">twitter</a>
    <img src="twitter.png" />
    <div class="item-content">
      <h2>mattmueller's twitter</h2>
      <section>mattmueller's bio</section>
    </div>
    <ul class="item-tags">
      <li>1</li>
      <li>2</li>
      <li>3</li>
    </ul>
  </div>
</header>
"""

LINKS_HTML = """\
<header>
  <a href="http://github.com/matthewmueller">github</a>
  <a href="http://twitter.com/mattmueller">twitter</a>
  <a href="http://mat.io">mat.io</a>
  <a href="http://lapwinglabs.com">lapwing labs</a>
  <a href="mailto:matt@lapwinglabs.com"></a>
</header>
"""

HEADINGS_HTML = """\
<h2>Github</h2>
<a href="http://github.com/matthewmueller">github</a>
<h2>Twitter</h2>
<a href="http://twitter.com/mattmueller">twitter</a>
"""


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def _href(value: str) -> str:
    return re.sub(r"^https?://", "", value)


def _secure(value: str) -> bool:
    return value.startswith("https://")


def _split(value: str, separator: str) -> list[str]:
    return value.split(separator)


@pytest.fixture()
def filters() -> dict[str, Callable[..., Any]]:
    """Small filter registry used across interpreter tests."""
    return {
        "href": _href,
        "secure": _secure,
        "uppercase": str.upper,
        "split": _split,
    }


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


@pytest.fixture()
def items(filters: dict[str, Callable[..., Any]]) -> Extractor:
    return Extractor(ITEMS_HTML, filters)


@pytest.fixture()
def links(filters: dict[str, Callable[..., Any]]) -> Extractor:
    return Extractor(LINKS_HTML, filters)


@pytest.fixture()
def headings() -> Extractor:
    return Extractor(HEADINGS_HTML)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Any:
    """Undo structlog configuration done by CLI/logging tests."""
    yield
    structlog.reset_defaults()
