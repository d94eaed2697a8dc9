"""Configuration module."""

from freelance_invoicing.config.logging import configure_logging, get_logger
from freelance_invoicing.config.settings import (
    Settings,
    get_settings,
    is_mock_mode,
    reset_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "is_mock_mode",
    "configure_logging",
    "get_logger",
]
