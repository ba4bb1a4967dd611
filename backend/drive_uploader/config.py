"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from dataclasses import dataclass
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


# Destination folder for every upload. Not exposed as a setting.
DRIVE_FOLDER_ID = "1Kop91GnH3jWtHv8T9z0D0jKuQ_NsXNGU"


@dataclass(frozen=True)
class CredentialSet:
    """Google OAuth2 credentials used for every Drive call."""
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def has_refresh_token(self) -> bool:
        return bool(self.refresh_token)

    @property
    def has_client_id(self) -> bool:
        return bool(self.client_id)

    @property
    def has_client_secret(self) -> bool:
        return bool(self.client_secret)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Google OAuth2 (refresh token flow)
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: Optional[str] = None
    google_refresh_token: Optional[str] = None  # Missing token is reported by /api/health
    
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    
    # Environment
    environment: str = "dev"
    log_level: str = "INFO"
    
    # Local staging directory for incoming parts
    upload_dir: str = "uploads"
    # Keep the local copy when the Drive upload fails (manual recovery)
    retain_failed_uploads: bool = True
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    def credentials(self) -> CredentialSet:
        """Snapshot the Google credentials as an immutable value."""
        return CredentialSet(
            client_id=self.google_client_id,
            client_secret=self.google_client_secret,
            redirect_uri=self.google_redirect_uri,
            refresh_token=self.google_refresh_token,
        )


# Global settings instance
settings = Settings()


@lru_cache
def get_credentials() -> CredentialSet:
    """Credential set captured once per process from settings."""
    return settings.credentials()
