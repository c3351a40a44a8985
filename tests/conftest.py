import asyncio
import io
import itertools
import zipfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from local_dynamodb.binaries.constants import JAR_NAME, LIB_DIR_NAME
from local_dynamodb.instances.manager import InstanceManager
from local_dynamodb.types import InstanceConfig, Mode, Settings

_pids = itertools.count(4000)


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process"""

    def __init__(self):
        self.pid = next(_pids)
        self.returncode = None
        self.terminated = False
        self._exited = asyncio.Event()

    def terminate(self):
        self.terminated = True
        self.exit(-15)

    def exit(self, code: int):
        self.returncode = code
        self._exited.set()

    async def wait(self) -> int:
        await self._exited.wait()
        return self.returncode


class FakeSpawner:
    """Records spawn calls and hands out FakeProcess instances"""

    def __init__(self):
        self.calls = []
        self.processes = []
        self.error = None

    async def __call__(self, program, *args, **kwargs):
        self.calls.append((program, list(args), kwargs))
        if self.error:
            raise self.error
        process = FakeProcess()
        self.processes.append(process)
        return process


def make_zip(files: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def mock_http_session(status: int = 200, body: bytes = b"", reason: str = "OK"):
    """ClientSession mock serving one response, read in chunks"""
    stream = io.BytesIO(body)

    mock_response = MagicMock()
    mock_response.status = status
    mock_response.reason = reason
    mock_response.content.read = AsyncMock(side_effect=lambda n=-1: stream.read(n))

    mock_request = MagicMock()
    mock_request.__aenter__ = AsyncMock(return_value=mock_response)
    mock_request.__aexit__ = AsyncMock(return_value=False)

    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    mock_session.get = MagicMock(return_value=mock_request)
    return mock_session


@pytest.fixture
def dynamodb_zip() -> bytes:
    """Minimal DynamoDB Local archive layout"""
    return make_zip(
        {
            JAR_NAME: b"jar",
            f"{LIB_DIR_NAME}/libsqlite4java-linux-amd64.so": b"so",
            "LICENSE.txt": b"license",
        }
    )


@pytest.fixture
def provisioner(tmp_path: Path) -> AsyncMock:
    return AsyncMock(return_value=tmp_path / ".local_dynamo")


@pytest.fixture
def spawner(monkeypatch) -> FakeSpawner:
    fake = FakeSpawner()
    monkeypatch.setattr(
        "local_dynamodb.instances.manager.asyncio.create_subprocess_exec", fake
    )
    return fake


@pytest_asyncio.fixture
async def manager(provisioner, spawner, tmp_path):
    """Manager wired to a fake provisioner and spawner"""
    manager = InstanceManager(
        InstanceConfig(port=8000, mode=Mode.IN_MEMORY),
        settings=Settings(port=8000, mode=Mode.IN_MEMORY, work_dir=tmp_path),
        provisioner=provisioner,
    )
    try:
        yield manager
    finally:
        manager.stop()
        # Let exit observers finish
        await asyncio.gather(*manager._watchers)
