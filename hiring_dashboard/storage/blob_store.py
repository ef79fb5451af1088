"""
Blob storage for candidate documents.

Document bytes live outside the database under an opaque key. The
services only see the BlobStore interface, so the local filesystem
implementation can be swapped for an object store without touching
them.
"""

import asyncio
import logging
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from hiring_dashboard.core.config import settings

logger = logging.getLogger(__name__)


class BlobStoreError(Exception):
    """A blob could not be written, read or removed."""

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class BlobStore(Protocol):
    """Interface for blob storage backends."""

    async def upload(self, key: str, data: bytes) -> None:
        ...

    async def download(self, key: str) -> bytes:
        ...

    async def delete(self, key: str) -> None:
        ...


class LocalBlobStore:
    """
    Filesystem blob store.

    Keys map to paths under root; file I/O runs in a worker thread so the
    event loop is never blocked.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise BlobStoreError(f"Invalid storage key: {key}", key)
        return path

    async def upload(self, key: str, data: bytes) -> None:
        path = self._path_for(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            raise BlobStoreError(f"Failed to upload blob: {exc}", key) from exc
        logger.debug("Stored blob %s (%d bytes)", key, len(data))

    async def download(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise BlobStoreError(f"Failed to download blob: {exc}", key) from exc

    async def delete(self, key: str) -> None:
        """Remove a blob. Deleting a missing blob is not an error."""
        path = self._path_for(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as exc:
            raise BlobStoreError(f"Failed to delete blob: {exc}", key) from exc
        logger.debug("Deleted blob %s", key)


@lru_cache
def get_blob_store() -> BlobStore:
    """Blob store configured for this process."""
    return LocalBlobStore(settings.BLOB_STORAGE_ROOT)
