from fastapi import APIRouter, Header

from supportbot.errors import ValidationError
from supportbot.schemas.documents import InitializeResponse
from supportbot.services.knowledge_base import ensure_pipeline

router = APIRouter()


@router.post("/initialize", response_model=InitializeResponse)
async def initialize(
    x_api_key: str | None = Header(default=None),
    x_project_id: str | None = Header(default=None),
    x_organization_id: str | None = Header(default=None),
) -> InitializeResponse:
    if not (x_api_key and x_project_id and x_organization_id):
        raise ValidationError("Missing required headers")
    index_id = await ensure_pipeline(x_api_key, x_project_id, x_organization_id)
    return InitializeResponse(index_id=index_id)
