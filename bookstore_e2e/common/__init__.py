"""
Common utilities shared by the UI suite and the runner script.

Modules:
    - config_loader: YAML configuration with environment overrides
    - log_setup: Loguru sink configuration
"""

from .config_loader import ConfigLoader, ConfigurationError, get_config
from .log_setup import ensure_directory, init_logger

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
    "init_logger",
    "ensure_directory",
]
