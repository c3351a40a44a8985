"""Provision a runnable DynamoDB Local tree on disk."""

import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional

from local_dynamodb.binaries.archives import archive_format, extract_archive, save_archive
from local_dynamodb.binaries.constants import (
    ARCHIVE_FILENAME,
    DEFAULT_DOWNLOAD_URL,
    INSTALL_DIR_NAME,
)
from local_dynamodb.binaries.fetching import download_url, read_local_source
from local_dynamodb.binaries.fs import PathOracle, path_exists
from local_dynamodb.errors import InvalidSourceError, WriteError
from local_dynamodb.logging import get_logger, log_with_data
from local_dynamodb.types import SourceDescriptor, SourceType

logger = get_logger(__name__)

Provisioner = Callable[..., Awaitable[Path]]


def resolve_source(descriptor: SourceDescriptor) -> str:
    """URL or path the archive is read from."""
    if descriptor.source_type == SourceType.WWW:
        return descriptor.source or DEFAULT_DOWNLOAD_URL
    return descriptor.source


def resolve_install_dir(work_dir: Optional[Path] = None) -> Path:
    """Fixed install directory under the working directory."""
    return (Path(work_dir) if work_dir else Path.cwd()).resolve() / INSTALL_DIR_NAME


def validate_source(descriptor: SourceDescriptor, path_oracle: PathOracle) -> None:
    """Reject local descriptors without an existing source."""
    if descriptor.source_type != SourceType.LOCAL:
        return

    if not descriptor.source:
        raise InvalidSourceError(
            "A source is required when specifying a local artifact of DynamoDB."
        )

    if not path_oracle(descriptor.source):
        raise InvalidSourceError(
            f"Local DynamoDB source does not exist: {descriptor.source}",
            source=descriptor.source,
        )


async def provision_binary(
    descriptor: SourceDescriptor,
    work_dir: Optional[Path] = None,
    path_oracle: PathOracle = path_exists,
) -> Path:
    """Materialize DynamoDB Local under ``<work_dir>/.local_dynamo``.

    Local descriptors are validated before anything touches the network
    or the filesystem. The archive is then fetched, and either extracted
    into the install directory (overwriting existing files) or saved there
    as ``dynamodb_local_latest.zip``.

    Returns the install directory in both cases. There are no retries and
    a failed step leaves whatever was already written in place.
    """
    validate_source(descriptor, path_oracle)

    source = resolve_source(descriptor)
    destination = resolve_install_dir(work_dir)

    log_with_data(
        logger,
        logging.INFO,
        "Provisioning DynamoDB Local",
        {
            "source_type": descriptor.source_type.value,
            "source": source,
            "extract": descriptor.extract,
            "destination": str(destination),
        },
    )

    if not path_oracle(destination):
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(str(destination), str(e)) from e

    if descriptor.source_type == SourceType.WWW:
        data = await download_url(source)
    else:
        data = read_local_source(Path(source))

    if descriptor.extract:
        extract_archive(data, archive_format(source), destination)
    else:
        save_archive(data, destination / ARCHIVE_FILENAME)

    log_with_data(
        logger,
        logging.INFO,
        "DynamoDB Local provisioned",
        {"destination": str(destination)},
    )

    return destination
