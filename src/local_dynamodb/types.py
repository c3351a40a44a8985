"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class Mode(Enum):
    """Storage behavior of the DynamoDB Local process"""

    IN_MEMORY = "inMemory"
    SHARED_DB = "sharedDb"


class Status(Enum):
    UP = "UP"
    DOWN = "DOWN"
    # Reserved for a readiness probe; never produced today
    PENDING = "PENDING"


class SourceType(Enum):
    WWW = "www"
    LOCAL = "local"


@dataclass
class InstanceConfig:
    """Live configuration of a managed instance"""

    port: int
    mode: Mode


@dataclass(frozen=True)
class InstanceStatus:
    """Point-in-time view of a managed instance"""

    status: Status
    port: int
    mode: Mode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "port": self.port,
            "mode": self.mode.value,
        }


@dataclass(frozen=True)
class SourceDescriptor:
    """Where to provision the DynamoDB Local archive from"""

    source_type: SourceType
    source: Optional[str] = None
    extract: bool = True


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, usually read from the environment"""

    port: int
    mode: Mode
    work_dir: Optional[Path] = None
    download_url: Optional[str] = None
    java_bin: str = "java"
    log_level: str = "DEBUG"
    # Send the child's stdout to our stderr instead of inheriting it
    redirect_output: bool = False
