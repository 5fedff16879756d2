"""Configuration module."""
from .settings import AppSettings, get_settings
from .manager import ConfigManager, Config

__all__ = ["AppSettings", "get_settings", "ConfigManager", "Config"]
