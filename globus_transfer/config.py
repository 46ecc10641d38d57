"""
load the config from config.yaml and .env
"""

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from . import __version__
from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"
DEFAULT_TRANSFER_BASE_URL = "https://transfer.api.globusonline.org/v0.10"
DEFAULT_AUTH_BASE_URL = "https://auth.globus.org/v2/api"
DEFAULT_USER_AGENT = f"globus-transfer-client/{__version__}"

# Environment variable -> nested config location
ENV_MAPPINGS = {
    'GLOBUS_TRANSFER_BASE_URL': ('transfer', 'base_url'),
    'GLOBUS_AUTH_BASE_URL': ('auth', 'base_url'),
    'GLOBUS_HTTP_TIMEOUT': ('http', 'timeout'),
    'GLOBUS_USER_AGENT': ('http', 'user_agent'),
    'LOG_LEVEL': ('logging', 'level'),
    'LOG_FORMAT': ('logging', 'format'),
}


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None, env_file: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to a YAML file. If None, the config.yaml shipped
                        next to this module is used.
            env_file: Optional .env file loaded before environment overrides
                      are applied. Existing environment variables win.
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        self.config_path = Path(config_path)
        if env_file is not None:
            load_dotenv(env_file, override=False)
        else:
            load_dotenv(override=False)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration root must be a mapping: {self.config_path}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        for env_var, config_path in ENV_MAPPINGS.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue

            current = config
            for key in config_path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value by walking nested keys.

        Args:
            *keys: Configuration keys (e.g., 'transfer', 'base_url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def transfer_base_url(self) -> str:
        """Base URL of the transfer API."""
        return str(self.get('transfer', 'base_url') or DEFAULT_TRANSFER_BASE_URL).rstrip('/')

    @property
    def auth_base_url(self) -> str:
        """Base URL of the identity API."""
        return str(self.get('auth', 'base_url') or DEFAULT_AUTH_BASE_URL).rstrip('/')

    @property
    def timeout(self) -> float:
        return float(self.get('http', 'timeout', default=30.0))

    @property
    def user_agent(self) -> str:
        return self.get('http', 'user_agent') or DEFAULT_USER_AGENT

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})
