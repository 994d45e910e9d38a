from fastapi import APIRouter, Depends, Request

from ltabus.models.common import HealthResponse
from ltabus.services.transit import TransitService, get_transit_service

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(
    request: Request,
    service: TransitService = Depends(get_transit_service),
) -> HealthResponse:
    version = request.app.version or "0.0.0"
    return HealthResponse(version=str(version), credentials_configured=service.has_credentials())
