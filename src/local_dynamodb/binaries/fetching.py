"""Fetch DynamoDB Local archives from the web or the local filesystem."""

import asyncio
from pathlib import Path

import aiohttp

from local_dynamodb.binaries.constants import DOWNLOAD_CHUNK_SIZE
from local_dynamodb.errors import FetchError
from local_dynamodb.logging import get_logger

logger = get_logger(__name__)

FETCH_TIMEOUT = aiohttp.ClientTimeout(total=None)


async def download_url(url: str) -> bytes:
    """Download ``url`` into memory with a single GET."""
    logger.info({"event": "download_started", "url": url})

    try:
        async with aiohttp.ClientSession(timeout=FETCH_TIMEOUT) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    logger.error(
                        {
                            "event": "download_failed",
                            "url": url,
                            "status": response.status,
                            "reason": response.reason,
                        }
                    )
                    raise FetchError(
                        url,
                        f"{response.status} {response.reason}",
                        status=response.status,
                    )

                chunks = []
                while chunk := await response.content.read(DOWNLOAD_CHUNK_SIZE):
                    chunks.append(chunk)

    except aiohttp.ClientError as e:
        logger.error({"event": "download_failed", "url": url, "error": str(e)})
        raise FetchError(url, str(e)) from e
    except asyncio.TimeoutError as e:
        logger.error({"event": "download_timed_out", "url": url})
        raise FetchError(url, "timed out") from e

    data = b"".join(chunks)
    logger.info({"event": "download_complete", "url": url, "size": len(data)})
    return data


def read_local_source(path: Path) -> bytes:
    """Read a local archive."""
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.error({"event": "read_failed", "path": str(path), "error": str(e)})
        raise FetchError(str(path), str(e)) from e

    logger.debug({"event": "local_source_read", "path": str(path), "size": len(data)})
    return data
