"""Abstract base class for upload signature sources."""

from abc import ABC, abstractmethod

from techtube.application.dtos.upload import GenerateSignatureRequest
from techtube.domain.models.upload import UploadSignature


class SignatureProviderBase(ABC):
    """Where an uploader obtains its upload signature.

    Implementations should handle:
    - In-process signing (server-side tools, tests)
    - Calling the signature endpoint of the API (remote clients)
    """

    @abstractmethod
    async def request_signature(
        self,
        request: GenerateSignatureRequest,
    ) -> UploadSignature:
        """Obtain a signature for one upload attempt.

        Args:
            request: Timestamp, folder, feature flags and resource type.

        Returns:
            Signature plus the exact parameters that were signed.
        """

    async def close(self) -> None:  # noqa: B027
        """Release held resources. Default is a no-op."""
