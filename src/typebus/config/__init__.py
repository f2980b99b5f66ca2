"""Configuration module for typebus."""

from typebus.config.logging import configure_logging, get_logger
from typebus.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger"]
