"""Manages configuration loading and validation."""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..models import Config, GrepOptions, MatchConfig

logger = logging.getLogger(__name__)

# Environment variable naming a default configuration file
CONFIG_ENV_VAR = "GREP_EMAIL_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration or command-line options are invalid."""
    pass


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_path: Path to a YAML configuration file. When None, the
                file named by GREP_EMAIL_CONFIG is used if that is set,
                otherwise the built-in defaults.
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or None
        self.config_path = config_path
        self.config: Config = Config()

        if self.config_path:
            self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, "r") as f:
                yaml_config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {self.config_path}")
        except OSError as e:
            raise ConfigError(f"Can't read config file {self.config_path}: {e}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(yaml_config, dict):
            raise ConfigError(f"Config file {self.config_path} must contain a mapping")

        try:
            self.config = Config(**yaml_config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}")

        logger.debug(f"Loaded configuration from {self.config_path}")

    def apply_overrides(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        output: Optional[Dict[str, Any]] = None,
    ) -> Config:
        """Override file values with command-line values.

        Values that are None are left as configured.

        Args:
            criteria: MatchConfig field values
            output: GrepOptions field values

        Returns:
            The merged configuration, which also replaces ``self.config``

        Raises:
            ConfigError: If the merged values are invalid
        """
        data = self.config.model_dump()
        for section, values in (("criteria", criteria), ("output", output)):
            for key, value in (values or {}).items():
                if value is not None:
                    data[section][key] = value

        try:
            self.config = Config(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid options: {e}")
        return self.config

    @property
    def criteria(self) -> MatchConfig:
        """Get the match criteria."""
        return self.config.criteria

    @property
    def output(self) -> GrepOptions:
        """Get the output options."""
        return self.config.output

    @property
    def log_level(self) -> str:
        """Get the logging level."""
        return self.config.logging.level
