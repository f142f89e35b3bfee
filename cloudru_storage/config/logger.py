import logging
from typing import Optional, Protocol

from pydantic import BaseModel

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to INFO if not provided.
    """
    log_level = level or "INFO"
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Console handler with formatting
    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))

    root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured with level: %s", log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance for a module.

    Args:
        name: Module name (typically __name__).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)


class LoggerOptions(BaseModel):
    """Настройки журнала ошибок ObjectStorageService.

    Attributes:
        name: Имя логгера.
        level: Уровень логирования.
        console: Писать ли записи в stderr.
        file_path: Путь к файлу журнала; None - без файла.
        format: Формат записи.
    """
    name: str = "cloudru_storage.errors"
    level: str = "ERROR"
    console: bool = True
    file_path: Optional[str] = None
    format: str = DEFAULT_FORMAT


class ErrorLogger(Protocol):
    def error(self, message: str, exc: BaseException) -> None:
        ...


class NullErrorLogger:
    """Error logger that drops every record."""

    def error(self, message: str, exc: BaseException) -> None:
        return None


class StdErrorLogger:
    """Error logger backed by a named stdlib logger.

    Handlers are attached once per logger name, so building several services
    with the same options does not duplicate records.
    """

    def __init__(self, options: Optional[LoggerOptions] = None):
        self.options = options or LoggerOptions()
        self._logger = logging.getLogger(self.options.name)
        self._logger.setLevel(getattr(logging, self.options.level.upper(), logging.ERROR))
        if not self._logger.handlers:
            formatter = logging.Formatter(self.options.format, datefmt=DEFAULT_DATEFMT)
            if self.options.console:
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(formatter)
                self._logger.addHandler(console_handler)
            if self.options.file_path:
                file_handler = logging.FileHandler(self.options.file_path, encoding="utf-8")
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def error(self, message: str, exc: BaseException) -> None:
        self._logger.error(message, exc_info=exc)
