"""
Pydantic schemas for API request/response validation.
"""
from drive_uploader.schemas.upload import (
    UploadSuccess,
    UploadFailure,
    UploadResult,
    UploadSummary,
    UploadResponse,
    ErrorResponse,
)
from drive_uploader.schemas.health import (
    GoogleDriveStatus,
    HealthResponse,
)

__all__ = [
    "UploadSuccess",
    "UploadFailure",
    "UploadResult",
    "UploadSummary",
    "UploadResponse",
    "ErrorResponse",
    "GoogleDriveStatus",
    "HealthResponse",
]
