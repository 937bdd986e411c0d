"""CLI configuration loading and overrides.

Settings are resolved with this precedence:
1) CLI flags (highest)
2) Environment variables (NESTDEPS_LOG_LEVEL, NESTDEPS_DECLARING_IDENTIFIER)
3) Explicit --config file, or the default YAML locations
4) Built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants, _load_yaml_config

logger = logging.getLogger(__name__)

CONFIG_KEY_DECLARING = "declaring_identifier"
CONFIG_KEY_LOG_LEVEL = "log_level"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from ``path`` (YAML, YML or JSON).

    Without a path the default YAML locations are searched instead.

    Raises:
        OSError: If an explicit path cannot be read.
        ConfigError: If the file is malformed or does not hold a mapping.
    """
    if not (isinstance(path, str) and path.strip()):
        return _load_yaml_config()
    with open(path, "r", encoding=Constants.ENCODING) as fh:
        try:
            if path.lower().endswith(".json"):
                cfg = json.load(fh)
            else:
                cfg = yaml.safe_load(fh)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Malformed config file {path}: {e}") from e
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config file does not hold a mapping: {path}")
    logger.debug("Loaded config from %s", path)
    return cfg


def _first_set(*values: Any) -> Optional[str]:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def apply_config_overrides(args, cfg: Optional[Dict[str, Any]]) -> None:
    """Fill unset CLI options from the environment and then from ``cfg``.

    Only options the parsed command actually has are touched.
    """
    cfg = cfg or {}
    args.LOG_LEVEL = _first_set(
        getattr(args, "LOG_LEVEL", None),
        os.environ.get(Constants.ENV_LOG_LEVEL),
        cfg.get(CONFIG_KEY_LOG_LEVEL),
        "INFO",
    ).upper()
    if hasattr(args, "DECLARING"):
        args.DECLARING = _first_set(
            args.DECLARING,
            os.environ.get(Constants.ENV_DECLARING_IDENTIFIER),
            cfg.get(CONFIG_KEY_DECLARING),
        )
