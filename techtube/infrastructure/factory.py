"""Infrastructure factory for creating service instances from configuration."""

from typing import Any, cast

from techtube.application.services.signing import UploadSignatureService
from techtube.commons.infrastructure.documentdb import DocumentDBBase, MongoDBDocumentDB
from techtube.commons.settings.models import Settings
from techtube.commons.telemetry import get_logger
from techtube.domain.exceptions import ConfigurationException
from techtube.domain.value_objects.media_urls import MediaUrlBuilder
from techtube.domain.value_objects.upload_chunking import UploadChunkingConfig
from techtube.infrastructure.auth import HttpSessionVerifier, SessionVerifierBase

logger = get_logger(__name__)


class InfrastructureFactory:
    """Factory for creating infrastructure service instances.

    Creates concrete implementations based on configuration settings.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize factory with settings.

        Args:
            settings: Application settings.
        """
        self._settings = settings
        self._instances: dict[str, Any] = {}

    def get_document_db(self) -> DocumentDBBase:
        """Get document database instance.

        Returns:
            Configured document database provider.
        """
        if "document_db" not in self._instances:
            doc_settings = self._settings.document_db
            if doc_settings.username and doc_settings.password:
                connection_string = (
                    f"mongodb://{doc_settings.username}:{doc_settings.password}"
                    f"@{doc_settings.host}:{doc_settings.port}"
                    f"/?authSource={doc_settings.auth_source}"
                )
            else:
                connection_string = f"mongodb://{doc_settings.host}:{doc_settings.port}"
            self._instances["document_db"] = MongoDBDocumentDB(
                connection_string=connection_string,
                database_name=doc_settings.database,
            )
        return cast("DocumentDBBase", self._instances["document_db"])

    def get_signature_service(self) -> UploadSignatureService:
        """Get the upload signing service.

        Credentials are checked when a signature is requested, not here, so
        the API can start without media configuration.
        """
        if "signature_service" not in self._instances:
            self._instances["signature_service"] = UploadSignatureService(
                self._settings.media
            )
        return cast("UploadSignatureService", self._instances["signature_service"])

    def get_url_builder(self) -> MediaUrlBuilder:
        """Get the delivery URL builder for the configured cloud.

        Raises:
            ConfigurationException: If no cloud name is configured.
        """
        if "url_builder" not in self._instances:
            media = self._settings.media
            if not media.cloud_name:
                raise ConfigurationException("Media storage", ["cloud_name"])
            self._instances["url_builder"] = MediaUrlBuilder(
                cdn_base_url=media.cdn_base_url,
                cloud_name=media.cloud_name,
            )
        return cast("MediaUrlBuilder", self._instances["url_builder"])

    def get_chunking_config(self) -> UploadChunkingConfig:
        """Get chunk size and threshold for client uploads."""
        media = self._settings.media
        return UploadChunkingConfig(
            chunk_size_bytes=media.chunk_size_bytes,
            chunked_threshold_bytes=media.chunked_upload_threshold_bytes,
        )

    def get_session_verifier(self) -> SessionVerifierBase:
        """Get the session verifier for the external auth service.

        Returns:
            Configured session verifier.
        """
        if "session_verifier" not in self._instances:
            auth = self._settings.auth
            self._instances["session_verifier"] = HttpSessionVerifier(
                base_url=auth.base_url,
                session_path=auth.session_path,
                timeout=auth.timeout_seconds,
            )
        return cast("SessionVerifierBase", self._instances["session_verifier"])

    async def close_all(self) -> None:
        """Close all service connections."""
        for name, instance in self._instances.items():
            close = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                close_result = close()
                if hasattr(close_result, "__await__"):
                    await close_result
            except Exception:
                logger.exception("Failed to close service", extra={"service": name})

        self._instances.clear()


class _FactoryHolder:
    """Holder for the factory singleton to avoid global statements."""

    instance: InfrastructureFactory | None = None


def get_factory(settings: Settings | None = None) -> InfrastructureFactory:
    """Get or create the infrastructure factory singleton.

    Args:
        settings: Settings to use. Required on first call.

    Returns:
        Infrastructure factory instance.

    Raises:
        ValueError: If settings not provided on first call.
    """
    if _FactoryHolder.instance is None:
        if settings is None:
            raise ValueError("Settings required to initialize factory")
        _FactoryHolder.instance = InfrastructureFactory(settings)

    return _FactoryHolder.instance


def reset_factory() -> None:
    """Reset the factory singleton (for testing)."""
    _FactoryHolder.instance = None
