#!/usr/bin/env python3
"""Settings loader for wordchain.

Defaults ship in ``configs/app.yaml`` next to this module. Set
``WORDCHAIN_CONFIG`` to the path of another YAML file to replace them.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
APP_CONFIG_PATH = PACKAGE_ROOT / "configs" / "app.yaml"
CONFIG_ENV_VAR = "WORDCHAIN_CONFIG"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return APP_CONFIG_PATH


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    path = config_path()
    if not path.exists():
        raise FileNotFoundError(f"Missing wordchain config: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Look up a setting by dotted path, e.g. ``generation.default_words``."""
    current: Any = load_app_config()
    for key in path.split('.'):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


__all__ = [
    "load_app_config",
    "get_setting",
    "config_path",
    "APP_CONFIG_PATH",
    "CONFIG_ENV_VAR",
]
