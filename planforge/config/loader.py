# planforge/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config directory management. The API
key is resolved here, once, so no pipeline component reads the environment.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from platformdirs import user_config_path
from pydantic import ValidationError

from planforge.errors import PlannerError

from .schema import PlannerConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "ANTHROPIC_API_KEY"


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path("planforge", ensure_exists=True)
    return config_dir / "config.yaml"


def load_config(path: Path | None = None) -> PlannerConfig:
    """
    Load configuration from YAML file.

    If the default config file doesn't exist, creates it with defaults.
    An explicit path that doesn't exist is an error.

    Raises:
        FileNotFoundError: If an explicit path does not exist
        PlannerError: If the file is not valid YAML or fails validation
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")

        default_config = PlannerConfig()
        config_dict = default_config.model_dump(mode="json")

        with config_path.open("w") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Created default config at {config_path}")
        return default_config

    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f) or {}
        config = PlannerConfig.model_validate(config_data)
    except (yaml.YAMLError, ValidationError) as e:
        raise PlannerError(f"Invalid config file {config_path}: {e}") from e

    logger.info(f"Loaded config from {config_path}")
    return config


def resolve_api_key(
    config: PlannerConfig,
    override: str | None = None,
    env: Mapping[str, str] | None = None,
) -> PlannerConfig:
    """
    Return a config whose anthropic.api_key is settled for this request.

    Precedence: explicit override, then the config file, then ANTHROPIC_API_KEY.
    """
    env = os.environ if env is None else env
    api_key = override or config.anthropic.api_key or env.get(API_KEY_ENV) or None
    if api_key == config.anthropic.api_key:
        return config
    anthropic = config.anthropic.model_copy(update={"api_key": api_key})
    return config.model_copy(update={"anthropic": anthropic})
