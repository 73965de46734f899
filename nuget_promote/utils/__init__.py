"""
Utility modules for nuget-promote.
"""

from .logger import setup_logging, WrappingFormatter
from .session import create_async_session
from .cancellation import CancellationToken, ensure_token
from .config_manager import ConfigManager
from .package_list import load_package_list, parse_package_line, parse_package_list
from .promote_config import PromoteConfig, load_promote_config, parse_promote_config

from . import constants
from . import error_handling
from . import logging_utils

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "create_async_session",
    "CancellationToken",
    "ensure_token",
    "ConfigManager",
    "load_package_list",
    "parse_package_line",
    "parse_package_list",
    "PromoteConfig",
    "load_promote_config",
    "parse_promote_config",
    "constants",
    "error_handling",
    "logging_utils",
]
