from .settings import Settings, S3Settings, LoggingSettings, get_settings
from .logger import (
    ErrorLogger,
    LoggerOptions,
    NullErrorLogger,
    StdErrorLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "S3Settings",
    "LoggingSettings",
    "get_settings",
    "ErrorLogger",
    "LoggerOptions",
    "NullErrorLogger",
    "StdErrorLogger",
    "configure_logging",
    "get_logger",
]
