"""Application configuration utilities."""

from .logging_config import get_logger, setup_logging
from .settings import DEFAULT_ASSISTANT_BASE_URL, DEFAULT_ASSISTANT_MODEL, DEFAULT_DATA_PATH, Settings, get_settings

__all__ = [
    "DEFAULT_ASSISTANT_BASE_URL",
    "DEFAULT_ASSISTANT_MODEL",
    "DEFAULT_DATA_PATH",
    "Settings",
    "get_logger",
    "get_settings",
    "setup_logging",
]
