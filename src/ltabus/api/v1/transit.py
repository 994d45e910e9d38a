from fastapi import APIRouter, Depends, Path

from ltabus.models.transit import ArrivalSnapshot, NetworkResponse, NetworkRows
from ltabus.services.transit import TransitService, get_transit_service

router = APIRouter(prefix="/api", tags=["transit"])


@router.get("/stops", response_model=NetworkResponse)
async def list_stops(
    service: TransitService = Depends(get_transit_service),
) -> NetworkResponse:
    network = await service.load_network()
    return NetworkResponse(total=len(network), stops=network)


@router.get("/stops/rows", response_model=NetworkRows)
async def list_stop_rows(
    service: TransitService = Depends(get_transit_service),
) -> NetworkRows:
    return await service.load_rows()


@router.get("/stops/{stop_code}/arrivals", response_model=ArrivalSnapshot)
async def get_stop_arrivals(
    stop_code: str = Path(..., description="DataMall bus stop code, e.g. 01012"),
    service: TransitService = Depends(get_transit_service),
) -> ArrivalSnapshot:
    return await service.get_arrivals(stop_code)
