"""Configuration management package."""

from .config_manager import ConfigError, ConfigManager

__all__ = ['ConfigError', 'ConfigManager']
