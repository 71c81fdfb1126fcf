"""Upload signing endpoints."""

from fastapi import APIRouter

from techtube.api.dependencies import CurrentSessionDep, SignatureServiceDep
from techtube.application.dtos.upload import (
    GenerateSignatureRequest,
    UploadSignatureResponse,
)
from techtube.commons.telemetry import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/uploads/signature",
    response_model=UploadSignatureResponse,
    summary="Sign a direct upload",
    description=(
        "Sign the parameters of a direct-to-provider upload. The client must "
        "send every returned signed parameter, unchanged, with each chunk."
    ),
)
async def generate_upload_signature(
    request: GenerateSignatureRequest,
    service: SignatureServiceDep,
    session: CurrentSessionDep,
) -> UploadSignatureResponse:
    """Return a signature for one upload attempt."""
    signature = service.generate_signature(request)
    logger.info(
        "Issued upload signature",
        extra={"user_id": session.user_id, "timestamp": signature.timestamp},
    )
    return UploadSignatureResponse.model_validate(signature.model_dump())
