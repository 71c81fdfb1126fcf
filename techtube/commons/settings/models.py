"""Pydantic settings models for application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class AppSettings(BaseModel):
    """Application-level settings."""

    name: str = "techtube-api"
    version: str = "0.1.0"
    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1, le=32)
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = "/v1"
    docs_enabled: bool = True


class DocumentCollectionSettings(BaseModel):
    """Document DB collection names."""

    videos: str = "videos"


class DocumentDBSettings(BaseModel):
    """Document database settings (MongoDB)."""

    provider: Literal["mongodb"] = "mongodb"
    host: str = "localhost"
    port: int = 27017
    username: str = ""
    password: str = ""
    database: str = "techtube"
    auth_source: str = "admin"
    collections: DocumentCollectionSettings = Field(
        default_factory=DocumentCollectionSettings
    )


class MediaStorageSettings(BaseModel):
    """Media provider settings (Cloudinary-compatible upload API).

    ``api_secret`` never leaves the server: it is only used to sign uploads.
    """

    provider: Literal["cloudinary"] = "cloudinary"
    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""
    upload_base_url: str = "https://api.cloudinary.com/v1_1"
    cdn_base_url: str = "https://res.cloudinary.com"
    upload_folder: str = "videos"
    chunk_size_bytes: int = Field(default=5 * MIB, ge=1)
    chunked_upload_threshold_bytes: int = Field(default=100 * MIB, ge=0)
    request_timeout_seconds: float | None = None

    @property
    def is_configured(self) -> bool:
        """Whether every credential needed for signed uploads is present."""
        return bool(self.cloud_name and self.api_key and self.api_secret)


class AuthSettings(BaseModel):
    """External authentication service settings."""

    base_url: str = "http://localhost:3000"
    session_path: str = "/api/auth/get-session"
    timeout_seconds: float = 5.0


class TelemetrySettings(BaseModel):
    """Logging settings."""

    log_format: Literal["json", "text"] = "json"
    log_level: str | None = None


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    document_db: DocumentDBSettings = Field(default_factory=DocumentDBSettings)
    media: MediaStorageSettings = Field(default_factory=MediaStorageSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TECHTUBE__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
