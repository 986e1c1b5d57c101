"""Configuration loading."""

import os
from pathlib import Path
from typing import Optional

import yaml

from config_models import FactsConfig

# env var -> (section, key)
ENV_OVERRIDES = {
    "FACTS_STORE_URL": ("store", "url"),
    "FACTS_STORE_KEY": ("store", "api_key"),
    "FACTS_LOG_LEVEL": ("logging", "level"),
    "FACTS_LOG_JSON": ("logging", "json_mode"),
}


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".facts-today" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def _apply_env(base_config: dict) -> dict:
    """Overlay FACTS_* environment variables onto the file config."""
    result = {section: dict(values) for section, values in base_config.items() if isinstance(values, dict)}
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is None or value == "":
            continue
        if key == "json_mode":
            value = value.lower() in ("1", "true", "yes")
        result.setdefault(section, {})[key] = value
    return result


def load_config_model(config_path: Optional[Path] = None) -> FactsConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return FactsConfig.from_dict(_apply_env(base_config))
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
