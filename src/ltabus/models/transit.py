from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SlotLabel = Literal["next", "next2", "next3"]
DayType = Literal["WD", "SAT", "SUN"]


class StopRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    road_name: str
    description: str
    latitude: float
    longitude: float


class ScheduleWindow(BaseModel):
    """First and last bus of a day type, as display text (e.g. ``"0530"``)."""

    first_bus: str
    last_bus: str


class RouteDetail(BaseModel):
    operator: str
    direction: int
    stop_sequence: int = Field(ge=0)
    distance: float | None = None
    weekday_first_last: ScheduleWindow
    saturday_first_last: ScheduleWindow
    sunday_first_last: ScheduleWindow


class StopAggregate(BaseModel):
    stop: StopRecord
    services: dict[str, RouteDetail] = Field(default_factory=dict)


class NetworkResponse(BaseModel):
    total: int
    stops: dict[str, StopAggregate]


class ArrivalEstimate(BaseModel):
    minutes_until_arrival: int = Field(ge=0)
    vehicle_type: str
    wheelchair_accessible: bool
    load_level: str


class SkippedSlot(BaseModel):
    service_no: str
    slot: SlotLabel
    estimated_arrival: str
    reason: str


class ArrivalSnapshot(BaseModel):
    stop_code: str
    services: dict[str, dict[SlotLabel, ArrivalEstimate]] = Field(default_factory=dict)
    skipped: list[SkippedSlot] = Field(
        default_factory=list,
        description="Slots left out because their arrival timestamp could not be parsed",
    )


class StopRow(BaseModel):
    code: str
    road_name: str
    description: str
    latitude: float
    longitude: float


class RouteRow(BaseModel):
    stop_code: str
    service_no: str
    operator: str
    direction: int
    stop_sequence: int
    distance: float | None = None


class ScheduleRow(BaseModel):
    stop_code: str
    service_no: str
    day_type: DayType
    first_bus: str
    last_bus: str


class NetworkRows(BaseModel):
    stops: list[StopRow] = Field(default_factory=list)
    routes: list[RouteRow] = Field(default_factory=list)
    schedules: list[ScheduleRow] = Field(default_factory=list)
