from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .models import BridgeConfig


logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "MAVEN_BRIDGE_CONFIG"


_config: Optional[BridgeConfig] = None


def get_config_path() -> Optional[Path]:
    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if not env_path:
        return None
    return Path(env_path).expanduser()


def load_config(path: Optional[Path] = None) -> BridgeConfig:
    """
    Load the bridge configuration from a JSON file, merging with defaults for
    any missing fields.

    Without a path (and without MAVEN_BRIDGE_CONFIG) the defaults are used.
    """
    if path is None:
        path = get_config_path()
    if path is None:
        return BridgeConfig()

    if not path.exists():
        logger.warning(f"Config file {path} does not exist, using defaults")
        return BridgeConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return BridgeConfig(**raw)
    except Exception as e:
        # If parsing fails, fall back to defaults.
        logger.error(f"Failed to load config from {path}: {e}. Using defaults.")
        return BridgeConfig()


def get_config() -> BridgeConfig:
    """
    Return the process-wide configuration, loading it on first use.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config
