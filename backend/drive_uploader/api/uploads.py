"""
Photo upload endpoint.

Flow for POST /api/upload-photos:
1. Reject the request if no parts were sent under `photos`
2. Reject the whole request if any part is not an image (nothing staged)
3. Stage every part in the local uploads directory
4. Forward staged files to Google Drive one at a time
5. Summarize per-file results

Per-file Drive errors are reported in the response body; anything else
aborts the request with a 500 carrying the raw error message.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from drive_uploader.exceptions import InvalidFileTypeError
from drive_uploader.schemas.upload import ErrorResponse, UploadResponse
from drive_uploader.services.upload_service import UploadService
from drive_uploader.storage.drive_client import RemoteStorageClient, get_drive_client
from drive_uploader.storage.staging import TemporaryStore, get_temporary_store
from drive_uploader.utils.logging import log_request_failed

logger = logging.getLogger(__name__)

router = APIRouter()

PHOTOS_FIELD = "photos"


def _error_response(status_code: int, error: Exception) -> JSONResponse:
    log_request_failed(logger, error=str(error), status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message="Upload failed", error=str(error)).model_dump()
    )


def _no_files_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(message="No files uploaded").model_dump(exclude_none=True)
    )


def file_parts(form: FormData, field_name: str = PHOTOS_FIELD) -> List[UploadFile]:
    """
    File parts sent under field_name, in the order received.

    Plain text values and parts without a filename (an empty file
    input in a browser form) are skipped.
    """
    return [
        value for value in form.getlist(field_name)
        if isinstance(value, UploadFile) and value.filename
    ]


@router.post(
    "/upload-photos",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No files, or a non-image file"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
)
async def upload_photos(
    request: Request,
    client: RemoteStorageClient = Depends(get_drive_client),
    store: TemporaryStore = Depends(get_temporary_store),
):
    """
    Upload images to Google Drive.

    Accepts multipart/form-data with any number of files under `photos`.
    Results are returned in the order the parts were received.
    """
    try:
        form = await request.form()
    except StarletteHTTPException as e:
        # Malformed multipart body
        return _error_response(status.HTTP_400_BAD_REQUEST, Exception(e.detail))

    try:
        photos = file_parts(form)
        if not photos:
            return _no_files_response()

        try:
            staged = await UploadService.stage_all(store, PHOTOS_FIELD, photos)
            results = await UploadService.upload_all(client, store, staged)
        except InvalidFileTypeError as e:
            return _error_response(status.HTTP_400_BAD_REQUEST, e)
        except Exception as e:
            return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e)
    finally:
        await form.close()

    return UploadResponse.from_results(results)
