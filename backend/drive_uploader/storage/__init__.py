"""
Storage module: local staging of incoming parts and the Google Drive client.

Incoming parts are validated, written to the staging directory, forwarded
to Drive one at a time, then removed locally.
"""
from drive_uploader.storage.staging import StagedFile, TemporaryStore, get_temporary_store
from drive_uploader.storage.validation import validate_content_type, validate_parts
from drive_uploader.storage.drive_client import (
    DriveReceipt,
    GoogleDriveClient,
    RemoteStorageClient,
    get_drive_client,
)

__all__ = [
    "StagedFile",
    "TemporaryStore",
    "get_temporary_store",
    "validate_content_type",
    "validate_parts",
    "DriveReceipt",
    "GoogleDriveClient",
    "RemoteStorageClient",
    "get_drive_client",
]
