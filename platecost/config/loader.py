"""Load :class:`AppConfig` and input files from YAML or JSON."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import AppConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration or input file cannot be used."""


def load_mapping_file(path: str) -> Dict[str, Any]:
    """Read a YAML (``.yaml``/``.yml``) or JSON file into a dict."""
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"File not found: {p}")

    try:
        with open(p, encoding="utf-8") as f:
            if p.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse {p}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {p}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{p} must contain a mapping, got {type(data).__name__}")
    return data


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """Build the app configuration.

    Without a path the defaults (and the ``PLATECOST_STORE_PATH``
    environment variable) apply.
    """
    if config_path is None:
        return AppConfig()

    data = load_mapping_file(config_path)
    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{e}") from e

    logger.info(f"Loaded configuration from {config_path}")
    return config
