"""Pydantic configuration models with validation."""

from __future__ import annotations

import re
from typing import Any, Callable, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from xselect.domain.ports.hooks import NOOP_OBJECT_HOOK, NOOP_SELECTOR_HOOK

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

# selector[attribute] | filter | filter:arg
DEFAULT_SELECTOR_PATTERN = r"^([^\[]+)?(?:\[([^\[\]]+)\])?$"
DEFAULT_FILTER_SEPARATOR = r"\s*\|\s*"
DEFAULT_ARGUMENT_SEPARATOR = ":"

# Alternate attribute syntaxes: a@href, a{href}
ATTRIBUTE_AT_PATTERN = r"^([^@]+)?(?:@(\S+))?$"
ATTRIBUTE_BRACE_PATTERN = r"^([^\{]+)?(?:\{([^\{\}]+)\})?$"

_DEFAULT_HOOKS: dict[str, Any] = {
    "selector_hook": NOOP_SELECTOR_HOOK,
    "object_hook": NOOP_OBJECT_HOOK,
}


def _compile_pattern(value: Any) -> re.Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    if isinstance(value, str):
        try:
            return re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid regular expression {value!r}: {e}") from e
    raise TypeError(f"Expected pattern string, got: {type(value)!r}")


class SelectOptions(BaseModel):
    """
    Per-extractor engine options.

    Defaults match the CSS-bracket-attribute, pipe-filter syntax
    (``"a.title[href] | trim"``). The legacy option names ``rselector``,
    ``rfilters``, ``selector_handler`` and ``object_handler`` are accepted
    as aliases.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    filters: dict[str, Callable[..., Any]] = Field(
        default_factory=dict,
        description="Filter registry: name -> fn(value, *args).",
    )
    selector_pattern: re.Pattern[str] = Field(
        default=re.compile(DEFAULT_SELECTOR_PATTERN),
        validation_alias=AliasChoices("selector_pattern", "rselector"),
        description="Splits a field selector into (selector, attribute) groups.",
    )
    filter_separator: re.Pattern[str] = Field(
        default=re.compile(DEFAULT_FILTER_SEPARATOR),
        validation_alias=AliasChoices("filter_separator", "rfilters"),
        description="Separates the field selector from filter invocations.",
    )
    argument_separator: str = Field(
        default=DEFAULT_ARGUMENT_SEPARATOR,
        min_length=1,
        description="Separates a filter name from its literal arguments.",
    )
    selector_hook: Callable[..., Any] = Field(
        default=NOOP_SELECTOR_HOOK,
        validation_alias=AliasChoices("selector_hook", "selector_handler"),
        description="SelectorHook consulted before singular string resolution.",
    )
    object_hook: Callable[..., Any] = Field(
        default=NOOP_OBJECT_HOOK,
        validation_alias=AliasChoices("object_hook", "object_handler"),
        description="ObjectHook consulted before field-mapping resolution.",
    )

    @field_validator("selector_pattern", "filter_separator", mode="before")
    @classmethod
    def _validate_patterns(cls, v: Any) -> re.Pattern[str]:
        return _compile_pattern(v)

    @field_validator("selector_pattern")
    @classmethod
    def _validate_selector_groups(cls, v: re.Pattern[str]) -> re.Pattern[str]:
        if v.groups < 2:
            raise ValueError(
                "selector_pattern needs two groups: (selector) and (attribute)"
            )
        return v

    @field_validator("selector_hook", "object_hook", mode="before")
    @classmethod
    def _validate_hooks(cls, v: Any, info: ValidationInfo) -> Any:
        # None means "no hook".
        if v is None:
            return _DEFAULT_HOOKS[info.field_name]
        return v

    @property
    def has_selector_hook(self) -> bool:
        return self.selector_hook is not NOOP_SELECTOR_HOOK

    @property
    def has_object_hook(self) -> bool:
        return self.object_hook is not NOOP_OBJECT_HOOK


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (logging/extraction/output).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="xselect", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Extraction (YAML section: extraction.*)
    parser: str = Field(
        default="lxml",
        validation_alias=AliasChoices(
            "parser",
            AliasPath("extraction", "parser"),
        ),
        description="BeautifulSoup tree builder (lxml, html.parser, html5lib).",
    )
    builtin_filters: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "builtin_filters",
            AliasPath("extraction", "builtin_filters"),
        ),
        description="Register the bundled filter library.",
    )

    # Output (YAML section: output.*)
    indent: Optional[int] = Field(
        default=2,
        validation_alias=AliasChoices(
            "indent",
            AliasPath("output", "indent"),
        ),
        description="JSON output indentation (None = compact).",
    )

    @field_validator("indent")
    @classmethod
    def _validate_indent(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("indent must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "logging": {"level": self.log_level, "format": self.log_format},
            "extraction": {
                "parser": self.parser,
                "builtin_filters": self.builtin_filters,
            },
            "output": {"indent": self.indent},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read XSELECT_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - XSELECT_ENVIRONMENT
    - XSELECT_LOG_LEVEL
    - XSELECT_PARSER
    - XSELECT_INDENT
    """

    model_config = SettingsConfigDict(
        env_prefix="XSELECT_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    parser: Optional[str] = None
    builtin_filters: Optional[bool] = None
    indent: Optional[int] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
