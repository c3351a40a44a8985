"""Download, start and stop a local DynamoDB instance for tests."""

from local_dynamodb.types import (
    InstanceConfig,
    InstanceStatus,
    Mode,
    Settings,
    SourceDescriptor,
    SourceType,
    Status,
)
from local_dynamodb.binaries import provision_binary
from local_dynamodb.instances import InstanceManager, create_instance
from local_dynamodb.config import settings_from_env
from local_dynamodb.errors import (
    LocalDynamoDbError,
    InvalidSourceError,
    FetchError,
    ExtractionError,
    WriteError,
    AlreadyRunningError,
    SpawnError,
    InvalidPortError,
    InvalidModeError,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "InstanceConfig",
    "InstanceStatus",
    "Mode",
    "Settings",
    "SourceDescriptor",
    "SourceType",
    "Status",

    # Lifecycle
    "InstanceManager",
    "create_instance",
    "provision_binary",
    "settings_from_env",

    # Error types
    "LocalDynamoDbError",
    "InvalidSourceError",
    "FetchError",
    "ExtractionError",
    "WriteError",
    "AlreadyRunningError",
    "SpawnError",
    "InvalidPortError",
    "InvalidModeError",
]
