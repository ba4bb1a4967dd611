"""
Health check endpoint.
Reports liveness and whether Google credentials are present (not whether they work).
"""
from fastapi import APIRouter, Depends

from drive_uploader.config import CredentialSet, get_credentials
from drive_uploader.schemas.health import GoogleDriveStatus, HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(credentials: CredentialSet = Depends(get_credentials)):
    """
    Health check endpoint.
    Always 200; credential values are never included, only presence flags.
    """
    return HealthResponse(google_drive=GoogleDriveStatus.from_credentials(credentials))
