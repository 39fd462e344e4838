"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from sikap.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from sikap.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Relative paths are validated against storage_root. Writes go to a temp
    file in the target directory, are hash-verified, then renamed into place;
    the temp file never outlives the call.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, storage_root: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
        """
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, relative_path: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / relative_path).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(relative_path, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(relative_path, "path_validation")
        return full_path

    async def _compute_checksum(self, file_path: Path) -> str:
        """SHA-256 of file."""
        sha256 = hashlib.sha256()
        async with aiofiles.open(file_path, "rb") as f:
            while True:
                chunk = await f.read(self.CHUNK_SIZE)
                if not chunk:
                    break
                sha256.update(chunk)
        return sha256.hexdigest()

    async def upload(
        self,
        data: bytes,
        relative_path: str,
        expected_hash: str,
        content_type: str,
    ) -> dict[str, Any]:
        """Write with atomic rename and hash validation. Idempotent if same hash."""
        target_path = self._get_full_path(relative_path)
        try:
            if target_path.exists():
                existing = await self._compute_checksum(target_path)
                if existing == expected_hash:
                    return {
                        "relative_path": relative_path,
                        "checksum": existing,
                        "size": target_path.stat().st_size,
                        "content_type": content_type,
                    }
                raise StorageAlreadyExistsError(relative_path)

            await aiofiles.os.makedirs(target_path.parent, mode=0o750, exist_ok=True)

            temp_fd, temp_name = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            temp_path = Path(temp_name)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                computed = await self._compute_checksum(temp_path)
                if computed != expected_hash:
                    raise StorageChecksumMismatchError(
                        relative_path, expected_hash, computed
                    )
                await aiofiles.os.rename(temp_path, target_path)
            finally:
                # Also runs on cancellation; a renamed temp file no longer exists.
                if temp_path.exists():
                    temp_path.unlink()

            logger.debug("Stored %s (%d bytes)", relative_path, len(data))
            return {
                "relative_path": relative_path,
                "checksum": computed,
                "size": len(data),
                "content_type": content_type,
                "uploaded_at": utc_now().isoformat(),
            }
        except (
            StorageChecksumMismatchError,
            StorageAlreadyExistsError,
            StoragePermissionError,
        ):
            raise
        except Exception as e:
            raise StorageUploadError(relative_path, str(e)) from e

    async def download(self, relative_path: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        file_path = self._get_full_path(relative_path)
        if not file_path.is_file():
            raise StorageNotFoundError(relative_path)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    chunk = await f.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
        except Exception as e:
            raise StorageDownloadError(relative_path, str(e)) from e

    async def delete(self, relative_path: str) -> bool:
        """Delete file. Returns True if deleted."""
        file_path = self._get_full_path(relative_path)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except Exception as e:
            raise StorageDeleteError(relative_path, str(e)) from e
        return True

    async def exists(self, relative_path: str) -> bool:
        """Return True if file exists."""
        try:
            return self._get_full_path(relative_path).is_file()
        except StoragePermissionError:
            return False
