"""DTOs for upload signing."""

from pydantic import BaseModel, Field


class GenerateSignatureRequest(BaseModel):
    """Request to sign a direct-to-provider upload.

    ``resource_type`` is required by the provider but is never signed.
    """

    timestamp: int = Field(description="Seconds since epoch; bound into the signature")
    folder: str | None = Field(
        default=None,
        description="Destination folder on the provider",
    )
    auto_chaptering: bool | None = Field(
        default=None,
        description="Ask the provider to generate chapters",
    )
    resource_type: str = Field(description="Provider resource type, e.g. 'video'")


class UploadSignatureResponse(BaseModel):
    """Signature handed back to the uploading client."""

    signature: str = Field(description="Hex SHA-1 signature")
    api_key: str = Field(description="Public API key")
    timestamp: int = Field(description="The signed timestamp, as sent")
    cloud_name: str = Field(description="Public cloud identifier")
    signed_params: dict[str, str] = Field(
        description="Parameters to echo verbatim on every chunk request",
    )
