"""Error types of the storage helper."""

from botocore.exceptions import BotoCoreError, ClientError

# Ошибки клиента S3 пробрасываются без обёртки; кортеж удобен для except.
StorageError = (ClientError, BotoCoreError)

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


class CloudRuStorageError(Exception):
    """Base exception for errors raised by the helper itself."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CloudRuStorageError, ValueError):
    """Raised when a required builder field is missing or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Required parameter is not set: {field}", {"field": field})
        self.field = field


def is_not_found(exc: BaseException) -> bool:
    """Return True if ``exc`` is an S3 error for a missing key."""
    if not isinstance(exc, ClientError):
        return False
    code = str(exc.response.get("Error", {}).get("Code", ""))
    return code in NOT_FOUND_CODES


__all__ = [
    "StorageError",
    "CloudRuStorageError",
    "ConfigurationError",
    "is_not_found",
]
