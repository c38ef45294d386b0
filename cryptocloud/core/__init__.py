"""Core configuration and logging."""

from cryptocloud.core.config import DEFAULT_BASE_URL, Settings, get_settings
from cryptocloud.core.logging import configure_logging

__all__ = ["DEFAULT_BASE_URL", "Settings", "configure_logging", "get_settings"]
