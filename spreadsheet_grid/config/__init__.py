"""
Configuration modules for the spreadsheet grid client.
"""

from .settings import Settings, EditSwitchPolicy, OutOfBoundsPolicy, get_settings
from .logging_config import setup_logging, get_logger, LoggerMixin
from .cors_config import get_cors_config

__all__ = [
    "Settings",
    "EditSwitchPolicy",
    "OutOfBoundsPolicy",
    "get_settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
    "get_cors_config"
]
