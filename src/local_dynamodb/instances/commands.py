"""DynamoDB Local command line construction."""

from pathlib import Path
from typing import List

from local_dynamodb.binaries.constants import JAR_NAME, LIB_DIR_NAME
from local_dynamodb.types import Mode

MODE_FLAGS = {
    Mode.IN_MEMORY: "-inMemory",
    Mode.SHARED_DB: "-sharedDb",
}


def build_java_args(base_path: Path, port: int, mode: Mode) -> List[str]:
    """Arguments for ``java`` to run DynamoDB Local from ``base_path``."""
    args = [
        f"-Djava.library.path={base_path / LIB_DIR_NAME}",
        "-jar",
        str(base_path / JAR_NAME),
    ]

    # Unknown modes get no flag at all
    flag = MODE_FLAGS.get(mode)
    if flag:
        args.append(flag)

    args.extend(["-port", str(port)])
    return args
