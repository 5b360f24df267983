"""User configuration loading"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import (
    ENV_AUTH_TOKEN,
    ENV_CONFIG_PATH,
    ENV_IDENTITY_KEY,
    ENV_PACKAGE_MANAGER,
    USER_CONFIG_DIR,
    USER_CONFIG_FILE,
)
from ..models.config import ClientConfig

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Path of the user configuration file

    ``$CARS_CONFIG`` wins over ``~/.cars/config.yaml``.
    """
    override = os.environ.get(ENV_CONFIG_PATH)
    if override:
        return Path(override).expanduser()
    return Path.home() / USER_CONFIG_DIR / USER_CONFIG_FILE


def load_client_config(path: Optional[Path] = None) -> ClientConfig:
    """Load user configuration

    A missing file yields defaults. Environment variables referenced in
    the file are expanded, and ``CARS_*`` variables override file values.

    Args:
        path: Configuration file (default: :func:`default_config_path`)

    Returns:
        ClientConfig

    Raises:
        ConfigError: If the file exists but is not a YAML mapping
    """
    path = path or default_config_path()
    data = {}

    if path.is_file():
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid configuration file {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")

        logger.debug(f"Loaded configuration from {path}")

    overrides = {
        'package_manager': os.environ.get(ENV_PACKAGE_MANAGER),
        'identity_key': os.environ.get(ENV_IDENTITY_KEY),
        'auth_token': os.environ.get(ENV_AUTH_TOKEN),
    }
    data.update({k: v for k, v in overrides.items() if v})

    try:
        return ClientConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value in {path}: {e}")

