"""Core configuration and logging"""

from .config import (
    ClientConfig,
    Environment,
    StorageProvider,
    default_api_url,
    detect_key_type,
)
from .logging import configure_logging, install_logging_bridge

__all__ = [
    "ClientConfig",
    "Environment",
    "StorageProvider",
    "configure_logging",
    "default_api_url",
    "detect_key_type",
    "install_logging_bridge",
]
