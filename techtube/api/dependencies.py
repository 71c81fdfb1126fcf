"""FastAPI dependency injection for services and settings."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from techtube.application.services.signing import UploadSignatureService
from techtube.application.services.video_catalog import VideoCatalogService
from techtube.commons.settings.loader import get_settings as _load_settings
from techtube.commons.settings.models import Settings
from techtube.domain.exceptions import AuthorizationException
from techtube.infrastructure.auth import AuthSession, SessionVerifierBase
from techtube.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Application settings loaded from config files and environment.
    """
    return _load_settings()


def get_infrastructure_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> InfrastructureFactory:
    """Get infrastructure factory with all providers.

    Args:
        settings: Application settings.

    Returns:
        Configured infrastructure factory.
    """
    return get_factory(settings)


def get_signature_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
) -> UploadSignatureService:
    """Get the upload signing service."""
    return factory.get_signature_service()


def get_video_catalog_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VideoCatalogService:
    """Get video catalog service with all dependencies.

    Args:
        factory: Infrastructure factory.
        settings: Application settings.

    Returns:
        Configured video catalog service.
    """
    return VideoCatalogService(
        document_db=factory.get_document_db(),
        url_builder=factory.get_url_builder,
        collection=settings.document_db.collections.videos,
    )


def get_session_verifier(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
) -> SessionVerifierBase:
    """Get the session verifier for the external auth service."""
    return factory.get_session_verifier()


async def get_current_session(
    request: Request,
    verifier: Annotated[SessionVerifierBase, Depends(get_session_verifier)],
) -> AuthSession:
    """Resolve the caller's session or reject the request.

    Raises:
        AuthorizationException: If the caller has no valid session.
    """
    session = await verifier.get_session(request.headers)
    if session is None:
        raise AuthorizationException()
    return session


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)]
SignatureServiceDep = Annotated[UploadSignatureService, Depends(get_signature_service)]
VideoCatalogServiceDep = Annotated[
    VideoCatalogService, Depends(get_video_catalog_service)
]
CurrentSessionDep = Annotated[AuthSession, Depends(get_current_session)]


async def init_services(settings: Settings) -> None:
    """Initialize all infrastructure services on startup.

    Args:
        settings: Application settings.
    """
    factory = get_factory(settings)

    # Pre-initialize critical services to fail fast
    factory.get_document_db()
    factory.get_session_verifier()


async def shutdown_services() -> None:
    """Shutdown all infrastructure services."""
    try:
        factory = get_factory()
    except ValueError:
        factory = None  # Factory not initialized
    try:
        if factory is not None:
            await factory.close_all()
    finally:
        reset_factory()
        get_settings.cache_clear()
