"""Lifecycle management for a single DynamoDB Local process.

An ``InstanceManager`` owns one ``InstanceConfig`` and at most one
subprocess handle. ``start`` refuses to run twice while ``stop`` on a
stopped instance quietly does nothing; callers that want symmetric
behavior should check ``liveness()`` first.
"""

import asyncio
import logging
import sys
from typing import Optional, Set

from local_dynamodb.binaries.provisioner import Provisioner, provision_binary
from local_dynamodb.config import DEFAULT_MODE, DEFAULT_PORT, parse_mode, validate_port
from local_dynamodb.errors import AlreadyRunningError, SpawnError
from local_dynamodb.instances.commands import build_java_args
from local_dynamodb.logging import get_logger, log_with_data
from local_dynamodb.types import (
    InstanceConfig,
    InstanceStatus,
    Mode,
    Settings,
    SourceDescriptor,
    SourceType,
    Status,
)

logger = get_logger(__name__)


class InstanceManager:
    """Start, stop and inspect one DynamoDB Local process."""

    def __init__(
        self,
        config: InstanceConfig,
        settings: Optional[Settings] = None,
        provisioner: Provisioner = provision_binary,
    ):
        self._config = config
        self._settings = settings or Settings(port=config.port, mode=config.mode)
        self._provisioner = provisioner
        self._process: Optional[asyncio.subprocess.Process] = None
        self._watchers: Set[asyncio.Task] = set()

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def mode(self) -> Mode:
        return self._config.mode

    async def start(self) -> None:
        """Provision DynamoDB Local and spawn it with the current config.

        Returns as soon as the process is spawned; it may not be accepting
        connections yet.

        Raises:
            AlreadyRunningError: a process is already running.
            SpawnError: the java executable could not be started.
        """
        if self._process is not None:
            raise AlreadyRunningError(self.port)

        port, mode = self.port, self.mode
        logger.info({"event": "instance_starting", "port": port, "mode": mode.value})

        base_path = await self._provisioner(
            SourceDescriptor(
                source_type=SourceType.WWW, source=self._settings.download_url
            ),
            work_dir=self._settings.work_dir,
        )

        java = self._settings.java_bin
        args = build_java_args(base_path, port, mode)
        logger.debug({"event": "instance_spawn", "command": [java, *args]})

        # Standard streams are inherited unless output is redirected
        streams = {"stdout": sys.stderr} if self._settings.redirect_output else {}

        try:
            process = await asyncio.create_subprocess_exec(java, *args, **streams)
        except OSError as e:
            log_with_data(
                logger,
                logging.ERROR,
                "Failed to start DynamoDB Local",
                {"command": java, "error": str(e)},
            )
            self._clear_handle()
            raise SpawnError(java, str(e)) from e

        self._process = process

        watcher = asyncio.create_task(self._watch(process))
        self._watchers.add(watcher)
        watcher.add_done_callback(self._watchers.discard)

        logger.info(
            {
                "event": "instance_started",
                "pid": process.pid,
                "port": port,
                "mode": mode.value,
            }
        )

    def stop(self) -> None:
        """Send SIGTERM to the running process, if any.

        The handle is cleared right away without waiting for the process to
        exit. Does nothing when no process is running.
        """
        process = self._process
        if process is None:
            logger.debug({"event": "instance_stop_skipped", "reason": "not running"})
            return

        logger.info({"event": "instance_stopping", "pid": process.pid})
        try:
            # SIGTERM rather than SIGKILL so DynamoDB Local can shut down cleanly
            process.terminate()
        except ProcessLookupError:
            logger.debug({"event": "instance_already_exited", "pid": process.pid})

        self._clear_handle()
        logger.info({"event": "instance_stopped", "pid": process.pid})

    async def restart(self) -> None:
        """Stop the running process, if any, then start a new one."""
        if self._process is not None:
            self.stop()
        await self.start()

    def configure(self, port: Optional[int] = None, mode: Optional[Mode] = None) -> None:
        """Update port and/or mode for the next ``start``.

        Every supplied value is validated before anything changes. A
        running process keeps its original settings.
        """
        new_port = validate_port(port) if port is not None else None
        new_mode = parse_mode(mode) if mode is not None else None

        if new_port is not None:
            self._config.port = new_port
        if new_mode is not None:
            self._config.mode = new_mode

        logger.debug(
            {
                "event": "instance_configured",
                "port": self._config.port,
                "mode": self._config.mode.value,
            }
        )

    def liveness(self) -> bool:
        return self._process is not None

    def readiness(self) -> bool:
        # No protocol-level probe; a live handle is as ready as we can tell
        return self.liveness()

    def status(self) -> InstanceStatus:
        return InstanceStatus(
            status=Status.UP if self._process is not None else Status.DOWN,
            port=self.port,
            mode=self.mode,
        )

    def _clear_handle(
        self, process: Optional[asyncio.subprocess.Process] = None
    ) -> None:
        """Drop the process handle; safe to call any number of times.

        With ``process`` given, only clears if it is still the current
        handle, so a late exit from a stopped process leaves a newer one
        alone.
        """
        if process is not None and process is not self._process:
            return
        self._process = None

    async def _watch(self, process: asyncio.subprocess.Process) -> None:
        """Exit and error observer for a spawned process."""
        try:
            code = await process.wait()
        except Exception as e:
            log_with_data(
                logger,
                logging.ERROR,
                "DynamoDB Local process failed",
                {"pid": process.pid, "error": str(e)},
            )
            self._clear_handle(process)
            return

        log_with_data(
            logger,
            logging.INFO,
            f"DynamoDB Local exited with code {code}",
            {"pid": process.pid, "returncode": code},
        )
        self._clear_handle(process)

    async def __aenter__(self) -> "InstanceManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.stop()


def create_instance(
    port: int = DEFAULT_PORT,
    mode: Mode = DEFAULT_MODE,
    settings: Optional[Settings] = None,
    provisioner: Provisioner = provision_binary,
) -> InstanceManager:
    """Create a manager for a local DynamoDB instance.

    Example:
        manager = create_instance(port=8000, mode=Mode.IN_MEMORY)
        await manager.start()
        ...
        manager.stop()
    """
    config = InstanceConfig(port=validate_port(port), mode=parse_mode(mode))
    return InstanceManager(config, settings=settings, provisioner=provisioner)
