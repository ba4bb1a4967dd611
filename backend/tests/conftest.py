"""
Test configuration and fixtures.
Uses a stub Drive client and a per-test staging directory; no network access.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["GOOGLE_REDIRECT_URI"] = "http://localhost:3000/oauth2callback"
os.environ["GOOGLE_REFRESH_TOKEN"] = "test-refresh-token"

import io

import pytest
from typing import AsyncGenerator, Iterable, List, Optional

from fastapi import FastAPI, UploadFile
from starlette.datastructures import Headers
from httpx import AsyncClient, ASGITransport

from drive_uploader.config import CredentialSet
from drive_uploader.exceptions import CredentialsNotConfiguredError
from drive_uploader.storage.drive_client import DriveReceipt, RemoteStorageClient
from drive_uploader.storage.staging import StagedFile, TemporaryStore


TEST_CREDENTIALS = CredentialSet(
    client_id="test-client-id",
    client_secret="test-client-secret",
    redirect_uri="http://localhost:3000/oauth2callback",
    refresh_token="test-refresh-token",
)


class StubDriveClient(RemoteStorageClient):
    """In-memory stand-in for Google Drive."""

    def __init__(self, fail_names: Iterable[str] = (), authorized: bool = True):
        self.fail_names = set(fail_names)
        self.authorized = authorized
        self.calls: List[StagedFile] = []
        # Whether the staged file was on disk when it was forwarded
        self.existed_on_upload: List[bool] = []

    def ensure_authorized(self) -> None:
        if not self.authorized:
            raise CredentialsNotConfiguredError()

    async def upload_one(self, staged: StagedFile) -> DriveReceipt:
        self.calls.append(staged)
        self.existed_on_upload.append(os.path.exists(staged.path))
        if staged.original_name in self.fail_names:
            raise RuntimeError(f"Quota exceeded for {staged.original_name}")
        file_id = f"drive-{len(self.calls)}"
        return DriveReceipt(
            id=file_id,
            name=staged.original_name,
            link=f"https://drive.google.com/file/d/{file_id}/view?usp=drivesdk",
            size=staged.size,
        )


def staged_entries(staging_dir) -> List[str]:
    """Names currently in the staging directory (empty if it does not exist)."""
    if not os.path.isdir(staging_dir):
        return []
    return sorted(os.listdir(staging_dir))


@pytest.fixture
def staging_dir(tmp_path) -> str:
    return str(tmp_path / "uploads")


@pytest.fixture
def store(staging_dir: str) -> TemporaryStore:
    return TemporaryStore(staging_dir)


@pytest.fixture
def stub_client() -> StubDriveClient:
    return StubDriveClient()


def get_test_app(
    drive_client: RemoteStorageClient,
    store: TemporaryStore,
    credentials: Optional[CredentialSet] = None
) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    from drive_uploader.main import app
    from drive_uploader.config import get_credentials
    from drive_uploader.storage.drive_client import get_drive_client
    from drive_uploader.storage.staging import get_temporary_store

    app.dependency_overrides[get_drive_client] = lambda: drive_client
    app.dependency_overrides[get_temporary_store] = lambda: store
    app.dependency_overrides[get_credentials] = lambda: credentials or TEST_CREDENTIALS

    return app


async def _make_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def client(stub_client: StubDriveClient, store: TemporaryStore) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(stub_client, store)
    async for ac in _make_client(app):
        yield ac


@pytest.fixture
async def client_unconfigured(store: TemporaryStore) -> AsyncGenerator[AsyncClient, None]:
    """Client whose Drive credentials lack a refresh token."""
    app = get_test_app(
        StubDriveClient(authorized=False),
        store,
        credentials=CredentialSet()
    )
    async for ac in _make_client(app):
        yield ac


def make_part(filename: str, content: bytes = b"image-bytes", content_type: str = "image/jpeg") -> UploadFile:
    """Build an in-memory multipart file part."""
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )
