"""Upstream DataMall payloads, validated as received.

Field aliases follow the PascalCase keys DataMall sends; anything not listed
here is ignored.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class DataMallModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


ItemT = TypeVar("ItemT", bound=DataMallModel)


class Page(BaseModel, Generic[ItemT]):
    """One ``$skip`` page of a DataMall listing endpoint."""

    value: list[ItemT]


class BusStopItem(DataMallModel):
    bus_stop_code: str = Field(alias="BusStopCode")
    road_name: str = Field(alias="RoadName")
    description: str = Field(alias="Description")
    latitude: float = Field(alias="Latitude")
    longitude: float = Field(alias="Longitude")


class BusRouteItem(DataMallModel):
    service_no: str = Field(alias="ServiceNo")
    operator: str = Field(alias="Operator")
    direction: int = Field(alias="Direction")
    stop_sequence: int = Field(alias="StopSequence", ge=0)
    bus_stop_code: str = Field(alias="BusStopCode")
    distance: float | None = Field(default=None, alias="Distance")
    wd_first_bus: str = Field(default="", alias="WD_FirstBus")
    wd_last_bus: str = Field(default="", alias="WD_LastBus")
    sat_first_bus: str = Field(default="", alias="SAT_FirstBus")
    sat_last_bus: str = Field(default="", alias="SAT_LastBus")
    sun_first_bus: str = Field(default="", alias="SUN_FirstBus")
    sun_last_bus: str = Field(default="", alias="SUN_LastBus")


class NextBusItem(DataMallModel):
    origin_code: str = Field(default="", alias="OriginCode")
    destination_code: str = Field(default="", alias="DestinationCode")
    estimated_arrival: str = Field(default="", alias="EstimatedArrival")
    monitored: int = Field(default=0, alias="Monitored")
    latitude: str = Field(default="", alias="Latitude")
    longitude: str = Field(default="", alias="Longitude")
    visit_number: str = Field(default="", alias="VisitNumber")
    load: str = Field(default="", alias="Load")
    feature: str = Field(default="", alias="Feature")
    vehicle_type: str = Field(default="", alias="Type")


class ServiceArrivalItem(DataMallModel):
    service_no: str = Field(alias="ServiceNo")
    operator: str = Field(default="", alias="Operator")
    next_bus: NextBusItem | None = Field(default=None, alias="NextBus")
    next_bus2: NextBusItem | None = Field(default=None, alias="NextBus2")
    next_bus3: NextBusItem | None = Field(default=None, alias="NextBus3")


class BusArrivalPayload(DataMallModel):
    bus_stop_code: str = Field(alias="BusStopCode")
    services: list[ServiceArrivalItem] = Field(default_factory=list, alias="Services")
