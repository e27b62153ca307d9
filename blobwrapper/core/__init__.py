"""Core module initialization."""

from .config_manager import BlobWrapperConfig, ConfigManager, LoggingConfig, LogLevel
from .logging_config import (
    setup_logging,
    get_logger,
    set_correlation_id,
    clear_correlation_id,
    log_with_context,
    SensitiveDataFilter,
)

__all__ = [
    "BlobWrapperConfig",
    "ConfigManager",
    "LoggingConfig",
    "LogLevel",
    "setup_logging",
    "get_logger",
    "set_correlation_id",
    "clear_correlation_id",
    "log_with_context",
    "SensitiveDataFilter",
]
