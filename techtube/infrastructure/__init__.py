"""Infrastructure layer - external service implementations."""

from techtube.infrastructure.auth import (
    AuthSession,
    HttpSessionVerifier,
    SessionVerifierBase,
)
from techtube.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from techtube.infrastructure.media import (
    ChunkedUploader,
    LocalSignatureProvider,
    RemoteSignatureProvider,
    SignatureProviderBase,
)

__all__ = [
    # Factory
    "InfrastructureFactory",
    "get_factory",
    "reset_factory",
    # Auth
    "AuthSession",
    "SessionVerifierBase",
    "HttpSessionVerifier",
    # Media
    "SignatureProviderBase",
    "LocalSignatureProvider",
    "RemoteSignatureProvider",
    "ChunkedUploader",
]
