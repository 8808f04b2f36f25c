"""
Description generation endpoints.

Protected: requests without a session are redirected to the login path.
"""

from fastapi import APIRouter, Depends

from modules.auth.models import User
from modules.descriptions.interfaces import IDescriptionService
from modules.descriptions.models import (
    DescriptionRequest,
    GeneratedDescription,
    RegenerationRequest,
)

from ..dependencies import get_description_service
from ..middleware.auth import RequireSession

router = APIRouter()


@router.post("", response_model=GeneratedDescription)
async def generate_description(
    body: DescriptionRequest,
    user: User = RequireSession,
    service: IDescriptionService = Depends(get_description_service),
) -> GeneratedDescription:
    return await service.generate(body)


@router.post("/regenerate", response_model=GeneratedDescription)
async def regenerate_description(
    body: RegenerationRequest,
    user: User = RequireSession,
    service: IDescriptionService = Depends(get_description_service),
) -> GeneratedDescription:
    return await service.regenerate(body.previous_description, body.feedback)
