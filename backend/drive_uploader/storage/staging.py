"""
Local staging area for incoming upload parts.

Parts are written under generated names
`{field}-{timestamp_ms}-{random}{ext}` so concurrent requests never
share a path, then removed once forwarded to Drive.
"""
import asyncio
import logging
import os
import random
import shutil
import time
from dataclasses import dataclass
from typing import Optional

from starlette.datastructures import UploadFile

from drive_uploader.config import settings
from drive_uploader.utils.logging import log_cleanup_failed, log_file_staged
from drive_uploader.utils.metrics import staged_files_total, staged_files_cleanup_failures_total

logger = logging.getLogger(__name__)

# Attempts at finding a free name before giving up
MAX_NAME_ATTEMPTS = 5


@dataclass(frozen=True)
class StagedFile:
    """An incoming part persisted in the staging directory."""
    field_name: str
    original_name: str
    content_type: str
    path: str
    size: int


class TemporaryStore:
    """Filesystem staging directory shared by all requests."""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def staged_name(self, field_name: str, original_name: Optional[str]) -> str:
        extension = os.path.splitext(original_name or "")[1]
        timestamp_ms = time.time_ns() // 1_000_000
        suffix = random.randint(0, 10**9)
        return f"{field_name}-{timestamp_ms}-{suffix}{extension}"

    def _write(self, field_name: str, part: UploadFile) -> StagedFile:
        self.ensure_dir()
        part.file.seek(0)

        for _ in range(MAX_NAME_ATTEMPTS):
            path = os.path.join(self.upload_dir, self.staged_name(field_name, part.filename))
            try:
                # "xb" refuses to open an existing path
                with open(path, "xb") as out:
                    shutil.copyfileobj(part.file, out)
            except FileExistsError:
                continue
            return StagedFile(
                field_name=field_name,
                original_name=part.filename or os.path.basename(path),
                content_type=part.content_type,
                path=path,
                size=os.path.getsize(path),
            )

        raise FileExistsError(f"Could not allocate a unique staging name for {part.filename}")

    async def stage(self, field_name: str, part: UploadFile) -> StagedFile:
        """Persist one part under a fresh unique name."""
        staged = await asyncio.to_thread(self._write, field_name, part)
        staged_files_total.inc()
        log_file_staged(logger, file_name=staged.original_name, path=staged.path, size_bytes=staged.size)
        return staged

    async def discard(self, staged: StagedFile) -> bool:
        """
        Remove a staged file.

        Best-effort: failures are logged and counted, never raised.

        Returns:
            True if the file is gone, False if removal failed
        """
        try:
            await asyncio.to_thread(os.remove, staged.path)
            return True
        except FileNotFoundError:
            return True
        except OSError as e:
            staged_files_cleanup_failures_total.inc()
            log_cleanup_failed(logger, file_name=staged.original_name, path=staged.path, error=str(e))
            return False


_temporary_store: Optional[TemporaryStore] = None


def get_temporary_store() -> TemporaryStore:
    """
    Get the process-wide staging store.

    Returns:
        TemporaryStore rooted at settings.upload_dir
    """
    global _temporary_store
    if _temporary_store is None:
        _temporary_store = TemporaryStore(settings.upload_dir)
    return _temporary_store
