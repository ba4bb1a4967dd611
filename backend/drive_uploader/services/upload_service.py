"""
Upload service: stages validated parts and forwards them to remote storage.
"""
import logging
import time
from typing import List, Optional, Sequence

from starlette.datastructures import UploadFile

from drive_uploader.config import settings
from drive_uploader.schemas.upload import UploadFailure, UploadResult, UploadSuccess
from drive_uploader.storage.drive_client import RemoteStorageClient, error_message
from drive_uploader.storage.staging import StagedFile, TemporaryStore
from drive_uploader.storage.validation import validate_parts
from drive_uploader.utils.logging import log_upload_failed, log_upload_succeeded
from drive_uploader.utils.metrics import drive_uploads_total, drive_upload_duration_seconds

logger = logging.getLogger(__name__)


class UploadService:
    """Service for the photo upload flow."""

    @staticmethod
    async def stage_all(
        store: TemporaryStore,
        field_name: str,
        parts: Sequence[UploadFile]
    ) -> List[StagedFile]:
        """
        Validate every part, then stage them in input order.

        Raises:
            InvalidFileTypeError: If any part is not an image (nothing is staged)
        """
        validate_parts(parts)

        staged: List[StagedFile] = []
        try:
            for part in parts:
                staged.append(await store.stage(field_name, part))
        except Exception:
            for staged_file in staged:
                await store.discard(staged_file)
            raise
        return staged

    @staticmethod
    async def upload_one(
        client: RemoteStorageClient,
        store: TemporaryStore,
        staged: StagedFile,
        retain_failed: bool = True
    ) -> UploadResult:
        """
        Upload one staged file and convert the outcome to a result.

        Errors are recorded in the result, never raised. The local copy is
        removed after success; after failure it is kept if retain_failed.
        """
        start = time.time()
        try:
            receipt = await client.upload_one(staged)
        except Exception as e:
            duration = time.time() - start
            message = error_message(e)
            drive_uploads_total.labels(status="failed").inc()
            drive_upload_duration_seconds.labels(status="failed").observe(duration)
            log_upload_failed(
                logger,
                file_name=staged.original_name,
                error=message,
                duration_ms=duration * 1000,
                include_traceback=True
            )
            if not retain_failed:
                await store.discard(staged)
            return UploadFailure(name=staged.original_name, error=message)

        duration = time.time() - start
        drive_uploads_total.labels(status="success").inc()
        drive_upload_duration_seconds.labels(status="success").observe(duration)
        log_upload_succeeded(
            logger,
            file_name=staged.original_name,
            drive_file_id=receipt.id,
            duration_ms=duration * 1000
        )

        await store.discard(staged)

        return UploadSuccess(
            id=receipt.id,
            name=receipt.name,
            link=receipt.link,
            size=receipt.size,
        )

    @staticmethod
    async def upload_all(
        client: RemoteStorageClient,
        store: TemporaryStore,
        staged_files: Sequence[StagedFile],
        retain_failed: Optional[bool] = None
    ) -> List[UploadResult]:
        """
        Forward staged files one at a time, preserving input order.

        A failure for one file does not affect the others.

        Raises:
            CredentialsNotConfiguredError: If the client cannot authenticate.
                Staged files are discarded before the error propagates.
        """
        if not staged_files:
            return []

        if retain_failed is None:
            retain_failed = settings.retain_failed_uploads

        try:
            client.ensure_authorized()
        except Exception:
            # No result will mention these files
            for staged in staged_files:
                await store.discard(staged)
            raise

        results: List[UploadResult] = []
        for staged in staged_files:
            results.append(await UploadService.upload_one(client, store, staged, retain_failed))
        return results
