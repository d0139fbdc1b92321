"""Shared infrastructure: configuration, logging and version lookup."""

from .config import AppConfig, ConfigurationError, load_app_config  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401
