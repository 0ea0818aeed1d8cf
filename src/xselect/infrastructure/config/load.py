"""Layered loading of the xselect CLI configuration.

Layers, lowest to highest priority: built-in defaults, the ``--config``
YAML file, ``XSELECT_*`` variables (optionally seeded from ``--dotenv``),
then command line flags. Every layer is reshaped into the sectioned form
(``logging`` / ``extraction`` / ``output``) before merging, and the merged
result is validated once as :class:`AppConfig`.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from xselect.domain.errors import ConfigError

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS: frozenset[str] = frozenset({"logging", "extraction", "output"})
_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")

# Flat option name -> (section, key inside the section).
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "parser": ("extraction", "parser"),
    "builtin_filters": ("extraction", "builtin_filters"),
    "indent": ("output", "indent"),
}


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *layer* over *target* in place; nested sections merge key by key."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = value
    return target


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Reshape a layer so flat keys (``parser``) land in their section."""
    out: dict[str, Any] = {
        name: dict(block)
        for name, block in layer.items()
        if name in _SECTIONS and isinstance(block, Mapping)
    }
    for key in _TOP_LEVEL_KEYS:
        if key in layer:
            out[key] = layer[key]
    for key, (section, name) in _FLAT_KEYS.items():
        if key in layer:
            out.setdefault(section, {})[name] = layer[key]
    return out


def _yaml_layer(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{path}: config YAML must be a mapping, got {type(data).__name__}"
        )
    return data


def _env_layer() -> dict[str, Any]:
    try:
        return EnvOverrides().to_update_dict()
    except ValidationError as e:
        raise ConfigError(f"Invalid XSELECT_* environment variable: {e}") from e


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Build the effective :class:`AppConfig`.

    Raises:
        FileNotFoundError: ``config_path`` or ``dotenv_path`` does not exist.
        ConfigError: unreadable YAML, bad environment values or a merged
            result that fails validation.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        # Variables already set in the process win over the file.
        load_dotenv(dotenv_path, override=False)

    merged = _sectioned(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        _merge_into(merged, _sectioned(_yaml_layer(config_path)))

    _merge_into(merged, _sectioned(_env_layer()))
    _merge_into(merged, _sectioned(cli_overrides or {}))

    try:
        return AppConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
