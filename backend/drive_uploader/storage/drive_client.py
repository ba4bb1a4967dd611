"""
Google Drive storage client.

Uses the OAuth2 refresh token flow: a long-lived refresh token is exchanged
for short-lived access tokens by google-auth, and each staged file is sent
with a single (non-resumable) files.create call.

Token refresh and transport retries are left to google-auth and
google-api-python-client; this client adds none of its own.
"""
import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from drive_uploader.config import DRIVE_FOLDER_ID, CredentialSet, get_credentials
from drive_uploader.exceptions import CredentialsNotConfiguredError
from drive_uploader.storage.staging import StagedFile

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive.file"]
DRIVE_FIELDS = "id, name, webViewLink, size"


@dataclass(frozen=True)
class DriveReceipt:
    """What Drive reports back for a created file."""
    id: str
    name: str
    link: str
    size: int


def error_message(error: Exception) -> str:
    """Human-readable message for an upload error."""
    if isinstance(error, HttpError):
        return getattr(error, "reason", None) or str(error)
    return str(error)


class RemoteStorageClient(ABC):
    """
    Narrow interface over the remote storage provider.

    Lets the upload flow run against a stub in tests.
    """

    @abstractmethod
    def ensure_authorized(self) -> None:
        """
        Fail fast when the client cannot authenticate.

        Raises:
            CredentialsNotConfiguredError: If no refresh token is configured
        """
        pass

    @abstractmethod
    async def upload_one(self, staged: StagedFile) -> DriveReceipt:
        """
        Upload one staged file.

        Args:
            staged: File persisted in the staging directory

        Returns:
            DriveReceipt for the created file

        Raises:
            Exception: Any provider or I/O error; the caller records it per file
        """
        pass


class GoogleDriveClient(RemoteStorageClient):
    """Uploads staged files into a fixed Google Drive folder."""

    def __init__(self, credentials: CredentialSet, folder_id: str = DRIVE_FOLDER_ID):
        self._credentials = credentials
        self._folder_id = folder_id
        self._oauth_credentials: Optional[Credentials] = None
        self._credentials_lock = threading.Lock()

    @property
    def folder_id(self) -> str:
        return self._folder_id

    def ensure_authorized(self) -> None:
        if not self._credentials.has_refresh_token:
            raise CredentialsNotConfiguredError()

    def _get_oauth_credentials(self) -> Credentials:
        """
        OAuth credentials shared by every upload thread.

        The access token is then refreshed once rather than per file. Two
        threads that find it expired at the same moment may both refresh;
        google-auth tolerates that and the later token simply wins.
        """
        with self._credentials_lock:
            if self._oauth_credentials is None:
                self._oauth_credentials = Credentials(
                    token=None,
                    refresh_token=self._credentials.refresh_token,
                    client_id=self._credentials.client_id,
                    client_secret=self._credentials.client_secret,
                    token_uri=GOOGLE_TOKEN_URI,
                    scopes=DRIVE_SCOPES,
                )
            return self._oauth_credentials

    def _build_service(self):
        """
        Build an authorized Drive v3 service.

        A fresh service (and HTTP transport) per call, since httplib2
        connections must not be shared across threads.
        """
        self.ensure_authorized()
        return build("drive", "v3", credentials=self._get_oauth_credentials(), cache_discovery=False)

    def _create_file(self, staged: StagedFile) -> DriveReceipt:
        service = self._build_service()
        metadata = {
            "name": staged.original_name,
            "mimeType": staged.content_type,
            "parents": [self._folder_id],
        }

        with open(staged.path, "rb") as fh:
            media = MediaIoBaseUpload(fh, mimetype=staged.content_type, resumable=False)
            response = service.files().create(
                body=metadata,
                media_body=media,
                fields=DRIVE_FIELDS,
            ).execute()

        # Drive returns size as a string and omits it for some file kinds
        size = response.get("size")
        return DriveReceipt(
            id=response["id"],
            name=response.get("name", staged.original_name),
            link=response.get("webViewLink", ""),
            size=int(size) if size is not None else staged.size,
        )

    async def upload_one(self, staged: StagedFile) -> DriveReceipt:
        logger.debug(f"Uploading {staged.original_name} to Drive folder {self._folder_id}")
        return await asyncio.to_thread(self._create_file, staged)


_drive_client: Optional[GoogleDriveClient] = None


def get_drive_client() -> RemoteStorageClient:
    """
    Get the singleton Google Drive client instance.

    Credentials are read once from settings; the client may be
    unconfigured, which is reported when an upload is attempted.
    """
    global _drive_client
    if _drive_client is None:
        _drive_client = GoogleDriveClient(get_credentials())
    return _drive_client
