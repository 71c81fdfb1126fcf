"""Session verification against the external auth service over HTTP."""

from collections.abc import Mapping

import httpx

from techtube.commons.telemetry import get_logger
from techtube.domain.exceptions import AuthorizationException
from techtube.infrastructure.auth.base import AuthSession, SessionVerifierBase

FORWARDED_HEADERS = ("cookie", "authorization")


class HttpSessionVerifier(SessionVerifierBase):
    """Asks the auth service's session endpoint who the caller is.

    The expected API format:
    GET {base_url}{session_path}
    Headers: the caller's Cookie and/or Authorization
    Response: {"session": {...}, "user": {"id": "...", ...}} or null
    """

    def __init__(
        self,
        base_url: str,
        session_path: str = "/api/auth/get-session",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the verifier.

        Args:
            base_url: Root URL of the auth service.
            session_path: Path of the session lookup endpoint.
            timeout: Request timeout in seconds.
            client: Pre-built client, mostly for tests.
        """
        self._url = f"{base_url.rstrip('/')}{session_path}"
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._logger = get_logger(__name__)

    async def get_session(
        self,
        headers: Mapping[str, str],
    ) -> AuthSession | None:
        """Forward the caller's credentials and parse the session.

        Raises:
            AuthorizationException: If the auth service cannot be reached or
                answers with an unexpected error.
        """
        forwarded = {
            name: value
            for name, value in headers.items()
            if name.lower() in FORWARDED_HEADERS
        }
        if not forwarded:
            return None

        try:
            response = await self._client.get(self._url, headers=forwarded)
        except httpx.HTTPError as e:
            self._logger.warning(
                "Auth service unreachable",
                extra={"url": self._url, "error": type(e).__name__},
            )
            raise AuthorizationException("Auth service unavailable") from e

        if response.status_code in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
            return None
        if not response.is_success:
            self._logger.warning(
                "Auth service returned an error",
                extra={"url": self._url, "status_code": response.status_code},
            )
            raise AuthorizationException("Auth service unavailable")

        try:
            data = response.json()
        except ValueError:
            return None

        user = data.get("user") if isinstance(data, dict) else None
        if not isinstance(user, dict) or not user.get("id"):
            return None

        session = data.get("session") or {}
        return AuthSession(
            user_id=str(user["id"]),
            email=user.get("email"),
            name=user.get("name"),
            expires_at=session.get("expiresAt") if isinstance(session, dict) else None,
            raw=data,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
