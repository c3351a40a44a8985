"""Error handling for local DynamoDB management."""

import logging
from typing import Any, Dict, Optional

from mcp.types import (
    ErrorData,
    INVALID_REQUEST,
    INVALID_PARAMS,
    INTERNAL_ERROR,
)

from local_dynamodb.logging import get_logger


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log an error with context."""
    logger = logger or get_logger("errors")

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, LocalDynamoDbError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    logger.error("Local DynamoDB error occurred", extra={"data": error_info})


class LocalDynamoDbError(Exception):
    """Base error class for local DynamoDB management."""

    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(code=self.code, message=str(self), data=self.details)


class InvalidSourceError(LocalDynamoDbError):
    """Provisioning source is missing or does not exist."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message, code=INVALID_PARAMS, details={"source": source})


class FetchError(LocalDynamoDbError):
    """Archive could not be fetched."""

    def __init__(self, source: str, reason: str, status: Optional[int] = None):
        super().__init__(
            f"Failed to fetch {source}: {reason}",
            code=INTERNAL_ERROR,
            details={"source": source, "status": status},
        )


class ExtractionError(LocalDynamoDbError):
    """Archive could not be extracted."""

    def __init__(self, reason: str, destination: Optional[str] = None):
        super().__init__(
            f"Failed to extract archive: {reason}",
            code=INTERNAL_ERROR,
            details={"destination": destination},
        )


class WriteError(LocalDynamoDbError):
    """Provisioned files could not be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to write {path}: {reason}",
            code=INTERNAL_ERROR,
            details={"path": path},
        )


class AlreadyRunningError(LocalDynamoDbError):
    """A process is already running for this instance."""

    def __init__(self, port: int):
        super().__init__(
            "There is already a local DynamoDB process running.",
            code=INVALID_REQUEST,
            details={"port": port},
        )


class SpawnError(LocalDynamoDbError):
    """The DynamoDB Local process could not be spawned."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            f"Failed to start DynamoDB Local with {command}: {reason}",
            code=INTERNAL_ERROR,
            details={"command": command},
        )


class InvalidPortError(LocalDynamoDbError):
    """Port outside the allowed range."""

    def __init__(self, port: Any):
        super().__init__(
            f"Invalid port {port!r}: must be an integer between 1024 and 65535",
            code=INVALID_PARAMS,
            details={"port": port if isinstance(port, (int, str)) else repr(port)},
        )


class InvalidModeError(LocalDynamoDbError):
    """Unrecognized storage mode."""

    def __init__(self, mode: Any):
        super().__init__(
            f"Invalid mode {mode!r}: must be 'inMemory' or 'sharedDb'",
            code=INVALID_PARAMS,
            details={"mode": mode if isinstance(mode, str) else repr(mode)},
        )
