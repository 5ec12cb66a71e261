"""Shared utilities for configuration, logging, and shutdown handling"""

from aimeswitcher.utils.config_loader import ConfigLoader
from aimeswitcher.utils.logging_config import configure_logging
from aimeswitcher.utils.shutdown import ShutdownSignal

__all__ = ["ConfigLoader", "ShutdownSignal", "configure_logging"]
