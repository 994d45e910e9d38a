from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from ltabus.core.config import Settings
from ltabus.core.credentials import StaticCredentialSource
from ltabus.main import app
from ltabus.models.transit import (
    ArrivalEstimate,
    ArrivalSnapshot,
    RouteDetail,
    ScheduleWindow,
    StopAggregate,
    StopRecord,
)
from ltabus.services.datamall import PAGE_SIZE
from ltabus.services.projection import project_rows
from ltabus.services.transit import TransitService, get_transit_service

API_KEY = "test-account-key"


def make_stop(index: int) -> dict:
    return {
        "BusStopCode": f"{index:05d}",
        "RoadName": f"Road {index}",
        "Description": f"Opp Blk {index}",
        "Latitude": 1.3 + index / 100000,
        "Longitude": 103.8 + index / 100000,
    }


def make_route(service_no: str, stop_code: str, sequence: int = 1, **overrides) -> dict:
    record = {
        "ServiceNo": service_no,
        "Operator": "SBST",
        "Direction": 1,
        "StopSequence": sequence,
        "BusStopCode": stop_code,
        "Distance": 0.6,
        "WD_FirstBus": "0500",
        "WD_LastBus": "2300",
        "SAT_FirstBus": "0530",
        "SAT_LastBus": "2330",
        "SUN_FirstBus": "0600",
        "SUN_LastBus": "2345",
    }
    record.update(overrides)
    return record


class FakeDataMall:
    """In-memory DataMall serving canned pages through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.stop_pages: list[list[dict]] = []
        self.route_pages: list[list[dict]] = []
        self.arrivals: dict = {"BusStopCode": "", "Services": []}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/BusStops"):
            return self._page(self.stop_pages, request)
        if path.endswith("/BusRoutes"):
            return self._page(self.route_pages, request)
        if path.endswith("/BusArrival"):
            return httpx.Response(200, json=self.arrivals)
        return httpx.Response(404, json={"fault": "not found"})

    @staticmethod
    def _page(pages: list[list[dict]], request: httpx.Request) -> httpx.Response:
        index = int(request.url.params["$skip"]) // PAGE_SIZE
        items = pages[index] if index < len(pages) else []
        return httpx.Response(200, json={"odata.metadata": "test", "value": items})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeTransitService(TransitService):
    def __init__(self) -> None:  # pragma: no cover - simple data wiring
        self.network = {
            "01012": StopAggregate(
                stop=StopRecord(
                    code="01012",
                    road_name="Victoria St",
                    description="Hotel Grand Pacific",
                    latitude=1.29684825487647,
                    longitude=103.85253591654006,
                ),
                services={
                    "2": RouteDetail(
                        operator="GAS",
                        direction=1,
                        stop_sequence=3,
                        distance=1.2,
                        weekday_first_last=ScheduleWindow(first_bus="0512", last_bus="2312"),
                        saturday_first_last=ScheduleWindow(first_bus="0512", last_bus="2312"),
                        sunday_first_last=ScheduleWindow(first_bus="0530", last_bus="2312"),
                    )
                },
            )
        }
        self.snapshot = ArrivalSnapshot(
            stop_code="01012",
            services={
                "2": {
                    "next": ArrivalEstimate(
                        minutes_until_arrival=4,
                        vehicle_type="SD",
                        wheelchair_accessible=True,
                        load_level="SEA",
                    )
                }
            },
        )
        self.error: Exception | None = None
        self.credentials_ok = True

    async def load_network(self):
        if self.error:
            raise self.error
        return self.network

    async def load_rows(self):
        return project_rows(await self.load_network())

    async def get_arrivals(self, stop_code: str):
        if self.error:
            raise self.error
        return self.snapshot.model_copy(update={"stop_code": stop_code})

    def has_credentials(self) -> bool:
        return self.credentials_ok


@pytest.fixture()
def fake_service() -> FakeTransitService:
    return FakeTransitService()


@pytest.fixture(autouse=True)
def override_transit_service(fake_service: FakeTransitService) -> Generator[None, None, None]:
    app.dependency_overrides[get_transit_service] = lambda: fake_service
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client(fake_service: FakeTransitService) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        lta_api_key=API_KEY,
        stops_url_template="https://datamall.test/BusStops?$skip={skip}",
        routes_url_template="https://datamall.test/BusRoutes?$skip={skip}",
        arrivals_url="https://datamall.test/v3/BusArrival",
        http_timeout_seconds=2.0,
    )


@pytest.fixture()
def credentials() -> StaticCredentialSource:
    return StaticCredentialSource({"LTA_API_KEY": API_KEY})


@pytest.fixture()
def datamall() -> FakeDataMall:
    return FakeDataMall()


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
