"""Storage service port used by the upload and download use cases."""

from collections.abc import AsyncIterator
from typing import Any, Protocol


class IStorageService(Protocol):
    """Protocol for file storage backends addressed by relative path."""

    async def upload(
        self,
        data: bytes,
        relative_path: str,
        expected_hash: str,
        content_type: str,
    ) -> dict[str, Any]:
        """Write bytes with hash verification. Idempotent if the same content already exists."""
        ...

    async def download(self, relative_path: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        ...

    async def delete(self, relative_path: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""
        ...

    async def exists(self, relative_path: str) -> bool:
        """Return True if file exists."""
        ...
