# Utilities package
from .config import Config, get_config, reset_config
from .log_setup import setup_logging

__all__ = [
    "Config",
    "get_config",
    "reset_config",
    "setup_logging",
]
