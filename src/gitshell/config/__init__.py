"""Configuration management for gitshell."""

from gitshell.config.exceptions import ConfigurationError, InvalidConfigurationError
from gitshell.config.models import GitShellConfig

__all__ = [
    "ConfigurationError",
    "GitShellConfig",
    "InvalidConfigurationError",
]
