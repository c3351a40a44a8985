"""Configuration validation and environment settings."""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from local_dynamodb.errors import InvalidModeError, InvalidPortError
from local_dynamodb.types import Mode, Settings

MIN_PORT = 1024
MAX_PORT = 65535

DEFAULT_PORT = 8000
DEFAULT_MODE = Mode.IN_MEMORY

ENV_PREFIX = "LOCAL_DYNAMODB_"


def validate_port(port: Any) -> int:
    """Return ``port`` if it is an int in the unprivileged range."""
    # bool is an int subclass
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidPortError(port)
    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidPortError(port)
    return port


def parse_mode(mode: Any) -> Mode:
    """Accept a Mode or its string value."""
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(mode)
    except ValueError:
        raise InvalidModeError(mode) from None


def _parse_env_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise InvalidPortError(raw) from None
    return validate_port(port)


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from LOCAL_DYNAMODB_* environment variables."""
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(f"{ENV_PREFIX}{name}")
        return value or None

    port = get("PORT")
    mode = get("MODE")
    work_dir = get("WORK_DIR")

    return Settings(
        port=_parse_env_port(port) if port else DEFAULT_PORT,
        mode=parse_mode(mode) if mode else DEFAULT_MODE,
        work_dir=Path(work_dir).expanduser() if work_dir else None,
        download_url=get("DOWNLOAD_URL"),
        java_bin=get("JAVA") or "java",
        log_level=(get("LOG_LEVEL") or "DEBUG").upper(),
    )
