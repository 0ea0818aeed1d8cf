from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, SelectOptions

__all__ = ["AppConfig", "EnvOverrides", "SelectOptions", "load_config"]
