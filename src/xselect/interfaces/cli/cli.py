from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import structlog
import yaml
from bs4 import FeatureNotFound

from xselect.application.extractor import Extractor
from xselect.domain.errors import ConfigError, XSelectError
from xselect.infrastructure.config import load_config
from xselect.infrastructure.filters.builtin import BUILTIN_FILTERS
from xselect.infrastructure.logging.setup import configure_logging

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xselect",
        description="Extract structured data from HTML with a declarative schema.",
    )

    parser.add_argument(
        "schema",
        help="Schema as a JSON/YAML file path or an inline JSON string.",
    )
    parser.add_argument(
        "html",
        nargs="?",
        default="-",
        help="HTML file to read ('-' for stdin, the default).",
    )

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--parser",
        default=None,
        help="Override BeautifulSoup tree builder (lxml, html.parser, ...).",
    )
    parser.add_argument(
        "--indent",
        default=None,
        type=int,
        help="Override JSON output indentation.",
    )
    parser.add_argument(
        "--no-builtin-filters",
        action="store_true",
        help="Do not register the bundled filter library.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


def load_schema(value: str) -> Any:
    """Load a schema from a file (JSON or YAML) or an inline JSON string."""
    path = Path(value)
    try:
        is_file = path.is_file()
    except OSError:
        # Inline JSON longer than the platform path limit.
        is_file = False

    if is_file:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)

    try:
        return json.loads(value)
    except json.JSONDecodeError:
        # A bare selector string is a valid schema too.
        return value


def _read_html(value: str, stdin: TextIO) -> str:
    if value == "-":
        return stdin.read()
    return Path(value).read_text(encoding="utf-8")


def start(
    argv: Iterable[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """
    Process entrypoint.

    Loads config once, configures logging, runs one extraction and prints the
    result as JSON to stdout.
    """
    if argv is None:
        argv = sys.argv[1:]
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.parser:
        cli_overrides["parser"] = args.parser
    if args.indent is not None:
        cli_overrides["indent"] = args.indent
    if args.no_builtin_filters:
        cli_overrides["builtin_filters"] = False
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    try:
        config = load_config(
            config_path=config_path,
            dotenv_path=dotenv_path,
            cli_overrides=cli_overrides,
        )
    except (ConfigError, FileNotFoundError) as e:
        print(f"xselect: {e}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging(config)
    log.debug("config_loaded", config=config.to_sectioned_dict())

    try:
        schema = load_schema(args.schema)
        html = _read_html(args.html, stdin)
        filters = BUILTIN_FILTERS if config.builtin_filters else {}
        result = Extractor(html, filters=filters, parser=config.parser)(schema)
    except (
        XSelectError,
        FeatureNotFound,
        OSError,
        json.JSONDecodeError,
        yaml.YAMLError,
    ) as e:
        log.error("extraction_failed", error=str(e), error_type=type(e).__name__)
        return EXIT_ERROR

    log.info(
        "extraction_complete",
        schema=args.schema if len(args.schema) < 80 else args.schema[:77] + "...",
        result_type=type(result).__name__,
    )
    json.dump(result, stdout, indent=config.indent, ensure_ascii=False, default=str)
    stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(start())
