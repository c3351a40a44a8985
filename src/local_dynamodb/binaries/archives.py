"""Archive extraction and raw archive persistence."""

import io
import tarfile
import zipfile
from pathlib import Path

from local_dynamodb.errors import ExtractionError, WriteError
from local_dynamodb.logging import get_logger

logger = get_logger(__name__)


def archive_format(name: str) -> str:
    """Archive format from a file name or URL, e.g. ``.zip`` or ``.tar.gz``."""
    suffixes = Path(name.split("?", 1)[0]).suffixes
    format = "".join(suffixes[-2:]) if len(suffixes) > 1 else "".join(suffixes)
    # Version-like names such as dynamodb_local_2.5.2.zip
    if format not in ARCHIVE_HANDLERS and suffixes:
        format = suffixes[-1]
    return format


def sniff_format(data: bytes) -> str:
    """Archive format from the content itself; zip when nothing matches."""
    if zipfile.is_zipfile(io.BytesIO(data)):
        return ".zip"
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:*"):
            return ".tar"
    except (tarfile.TarError, EOFError, OSError):
        return ".zip"


def _extract_zip(data: bytes, dest_dir: Path) -> None:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        archive.extractall(dest_dir)


def _extract_tar(data: bytes, dest_dir: Path) -> None:
    # r:* handles gzip, bzip2, xz and plain tarballs
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as archive:
        archive.extractall(dest_dir, filter="data")


ARCHIVE_HANDLERS = {
    ".zip": _extract_zip,
    ".tar": _extract_tar,
    ".tar.gz": _extract_tar,
    ".tgz": _extract_tar,
}


def extract_archive(data: bytes, format: str, dest_dir: Path) -> Path:
    """Extract an in-memory archive into ``dest_dir``, overwriting files.

    ``format`` is a hint taken from the source name. Sources without a
    recognized suffix (mirrors, presigned links) are sniffed instead.
    """
    if format not in ARCHIVE_HANDLERS:
        format = sniff_format(data)
    handler = ARCHIVE_HANDLERS[format]

    logger.debug(
        {"event": "extract_archive", "format": format, "dest": str(dest_dir)}
    )

    try:
        handler(data, dest_dir)
    except (zipfile.BadZipFile, tarfile.TarError, OSError, EOFError) as e:
        logger.error(
            {
                "event": "extract_failed",
                "format": format,
                "dest": str(dest_dir),
                "error": str(e),
            }
        )
        raise ExtractionError(str(e), str(dest_dir)) from e

    logger.info({"event": "archive_extracted", "extracted_to": str(dest_dir)})
    return dest_dir


def save_archive(data: bytes, file_path: Path) -> Path:
    """Write the raw archive to ``file_path``."""
    try:
        file_path.write_bytes(data)
    except OSError as e:
        logger.error(
            {"event": "save_failed", "path": str(file_path), "error": str(e)}
        )
        raise WriteError(str(file_path), str(e)) from e

    logger.info({"event": "archive_saved", "path": str(file_path)})
    return file_path
