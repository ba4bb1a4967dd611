"""
Service layer for business logic.
"""
from drive_uploader.services.upload_service import UploadService

__all__ = ["UploadService"]
