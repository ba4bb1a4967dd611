"""
Pydantic schemas for the health endpoint.
"""
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

from drive_uploader.config import CredentialSet

Presence = Literal["Set", "Not set"]


def _presence(flag: bool) -> Presence:
    return "Set" if flag else "Not set"


class GoogleDriveStatus(BaseModel):
    """Presence of Google credentials. Values are never exposed."""
    configured: bool = Field(..., description="Whether a refresh token is set")
    client_id: Presence = Field(..., alias="clientId")
    client_secret: Presence = Field(..., alias="clientSecret")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_credentials(cls, credentials: CredentialSet) -> "GoogleDriveStatus":
        return cls(
            configured=credentials.has_refresh_token,
            client_id=_presence(credentials.has_client_id),
            client_secret=_presence(credentials.has_client_secret),
        )


class HealthResponse(BaseModel):
    """Response schema for GET /api/health."""
    status: Literal["OK"] = "OK"
    message: str = "Server is running"
    google_drive: GoogleDriveStatus = Field(..., alias="googleDrive")

    model_config = ConfigDict(populate_by_name=True)
