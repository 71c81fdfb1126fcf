"""Upload signing service.

Signs direct-to-provider uploads so the browser (or any client) can send
bytes straight to the media provider without ever seeing the API secret.

Signing contract (Cloudinary-compatible):
- Every upload parameter except ``resource_type``, ``file``, ``cloud_name``
  and ``api_key`` is signed.
- Parameters are sorted by name, joined as ``key=value`` with ``&``, the API
  secret is appended, and the result is hashed with SHA-1 (hex).
- The client must send back exactly the parameters that were signed.
"""

import hashlib

from techtube.application.dtos.upload import GenerateSignatureRequest
from techtube.commons.settings.models import MediaStorageSettings
from techtube.commons.telemetry import get_logger
from techtube.domain.exceptions import ConfigurationException, ValidationException
from techtube.domain.models.upload import UploadSignature

logger = get_logger(__name__)


def build_string_to_sign(params: dict[str, str], api_secret: str) -> str:
    """Serialize params in the provider's canonical order and append the secret."""
    canonical = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return canonical + api_secret


def compute_signature(params: dict[str, str], api_secret: str) -> str:
    """SHA-1 hex digest of the canonical parameter string."""
    payload = build_string_to_sign(params, api_secret).encode("utf-8")
    return hashlib.sha1(payload).hexdigest()  # noqa: S324 - provider-mandated


class UploadSignatureService:
    """Produces time-bound upload signatures from server-side credentials."""

    def __init__(self, media_settings: MediaStorageSettings) -> None:
        """Initialize the service.

        Args:
            media_settings: Provider credentials and public identifiers.
        """
        self._settings = media_settings

    def _ensure_configured(self) -> None:
        missing = [
            name
            for name, value in (
                ("api_key", self._settings.api_key),
                ("api_secret", self._settings.api_secret),
                ("cloud_name", self._settings.cloud_name),
            )
            if not value
        ]
        if missing:
            raise ConfigurationException("Media storage", missing)

    @staticmethod
    def collect_signed_params(request: GenerateSignatureRequest) -> dict[str, str]:
        """Parameters of the request that are part of the signing contract."""
        params = {"timestamp": str(request.timestamp)}
        if request.folder:
            params["folder"] = request.folder
        if request.auto_chaptering:
            params["auto_chaptering"] = "true"
        return params

    def generate_signature(self, request: GenerateSignatureRequest) -> UploadSignature:
        """Sign an upload request.

        Args:
            request: Timestamp, optional folder/feature flags and resource type.

        Returns:
            Signature, public key, timestamp, cloud name and the signed params.

        Raises:
            ConfigurationException: If credentials or cloud name are missing.
            ValidationException: If ``resource_type`` is empty.
        """
        self._ensure_configured()

        if not request.resource_type:
            raise ValidationException(
                "resource_type", "resource_type is required for uploads"
            )

        signed_params = self.collect_signed_params(request)
        signature = compute_signature(signed_params, self._settings.api_secret)

        logger.debug(
            "Generated upload signature",
            extra={
                "signed_keys": sorted(signed_params),
                "resource_type": request.resource_type,
            },
        )

        return UploadSignature(
            signature=signature,
            api_key=self._settings.api_key,
            timestamp=request.timestamp,
            cloud_name=self._settings.cloud_name,
            signed_params=signed_params,
        )
