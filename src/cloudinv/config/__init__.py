"""Configuration management."""

from .manager import Config, ConfigManager, default_config_dir
from ..models.config import AuthConfig, OutputConfig, ProfileConfig

__all__ = [
    "AuthConfig",
    "Config",
    "ConfigManager",
    "OutputConfig",
    "ProfileConfig",
    "default_config_dir",
]
