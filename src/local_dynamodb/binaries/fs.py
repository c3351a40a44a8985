"""Filesystem helpers."""

from pathlib import Path
from typing import Callable, Union

PathOracle = Callable[[Union[str, Path]], bool]


def path_exists(target: Union[str, Path]) -> bool:
    """Check if a file or directory exists at the given path."""
    return Path(target).exists()
