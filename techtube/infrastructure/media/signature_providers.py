"""Signature providers: in-process signing and the remote API endpoint."""

from collections.abc import Mapping

import httpx

from techtube.application.dtos.upload import GenerateSignatureRequest
from techtube.application.services.signing import UploadSignatureService
from techtube.commons.telemetry import get_logger
from techtube.domain.exceptions import AuthorizationException, TransportException
from techtube.domain.models.upload import UploadSignature
from techtube.infrastructure.media.base import SignatureProviderBase

logger = get_logger(__name__)


class LocalSignatureProvider(SignatureProviderBase):
    """Signs with the server's own credentials, without any network hop."""

    def __init__(self, service: UploadSignatureService) -> None:
        self._service = service

    async def request_signature(
        self,
        request: GenerateSignatureRequest,
    ) -> UploadSignature:
        """Sign the request in-process."""
        return self._service.generate_signature(request)


class RemoteSignatureProvider(SignatureProviderBase):
    """Requests signatures from the API's ``/uploads/signature`` endpoint.

    The endpoint is authenticated, so the caller's session cookie or bearer
    token is sent along with every request.
    """

    def __init__(
        self,
        api_url: str,
        *,
        api_prefix: str = "/v1",
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_url: Base URL of the TechTube API.
            api_prefix: Versioned route prefix.
            headers: Extra headers, e.g. ``Authorization``.
            cookies: Session cookies issued by the auth service.
            timeout: Request timeout in seconds.
            client: Pre-built client; the provider will not close it.
        """
        self._endpoint = f"{api_url.rstrip('/')}{api_prefix}/uploads/signature"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=dict(headers or {}),
            cookies=dict(cookies or {}),
            timeout=httpx.Timeout(timeout),
        )

    async def request_signature(
        self,
        request: GenerateSignatureRequest,
    ) -> UploadSignature:
        """POST the request to the API and parse the signature.

        Raises:
            AuthorizationException: If the API rejects the session.
            TransportException: On network errors or any other non-2xx reply.
        """
        try:
            response = await self._client.post(
                self._endpoint,
                json=request.model_dump(exclude_none=True),
            )
        except httpx.HTTPError as e:
            raise TransportException(
                f"signature request failed: {type(e).__name__}"
            ) from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthorizationException("Signature endpoint rejected the session")
        if not response.is_success:
            raise TransportException(
                f"signature endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
                response_text=response.text,
            )

        logger.debug("Received upload signature", extra={"endpoint": self._endpoint})
        return UploadSignature.model_validate(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
