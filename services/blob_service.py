import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import unquote, urlparse

from models.errors import UpstreamStagingError

logger = logging.getLogger(__name__)


class BlobStagingService:
    """Transient public storage for files the model has to fetch by URL."""

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    def _storage(self):
        return self.client.storage.from_(self.bucket)

    def put(self, name: str, data: bytes, content_type: str) -> str:
        """Upload ``data`` under ``name`` and return its public URL."""
        try:
            self._storage().upload(
                path=name,
                file=data,
                file_options={"content-type": content_type},
            )
            url = self._storage().get_public_url(name)
        except Exception as e:
            raise UpstreamStagingError(f"Failed to upload file to blob storage: {str(e)}") from e

        if not url:
            raise UpstreamStagingError("Failed to upload file to blob storage")
        return url.rstrip("?")

    def delete(self, url: str) -> None:
        self._storage().remove([self.path_from_url(url)])

    def path_from_url(self, url: str) -> str:
        """Map a public URL back to the object path inside the bucket."""
        marker = f"/object/public/{self.bucket}/"
        path = urlparse(url).path
        if marker not in path:
            raise ValueError(f"URL is not in bucket '{self.bucket}': {url}")
        return unquote(path.split(marker, 1)[1])


def staged_name(prefix: str, filename: str) -> str:
    """Collision-resistant object name: prefix, epoch millis and original filename."""
    return f"{prefix}-{int(time.time() * 1000)}-{filename}"


@asynccontextmanager
async def staged_file(
    staging: BlobStagingService, name: str, data: bytes, content_type: str
) -> AsyncIterator[str]:
    """
    Stage a payload for the duration of the block, deleting it afterwards.

    Storage calls are blocking HTTP requests, so they run in a worker thread.
    """
    url = await asyncio.to_thread(staging.put, name, data, content_type)
    logger.info(f"Staged {name}")
    try:
        yield url
    finally:
        try:
            await asyncio.to_thread(staging.delete, url)
        except Exception as cleanup_error:
            # Don't fail the request if cleanup fails
            logger.error(f"Error cleaning up blob file {url}: {str(cleanup_error)}")
