"""Session verification against the external auth service."""

from techtube.infrastructure.auth.base import AuthSession, SessionVerifierBase
from techtube.infrastructure.auth.http_session_verifier import HttpSessionVerifier

__all__ = [
    # Base classes
    "AuthSession",
    "SessionVerifierBase",
    # Implementations
    "HttpSessionVerifier",
]
