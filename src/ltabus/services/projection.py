"""Flatten the stop aggregate into rows for an external SQL store.

This package does not execute ``SCHEMA_SQL``; the persistence layer applies it
and inserts the rows returned by ``project_rows``.
"""

from collections.abc import Mapping

from ltabus.models.transit import (
    DayType,
    NetworkRows,
    RouteDetail,
    RouteRow,
    ScheduleRow,
    ScheduleWindow,
    StopAggregate,
    StopRow,
)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS bus_stops (
    bus_stop_code TEXT PRIMARY KEY,
    road_name TEXT NOT NULL,
    description TEXT NOT NULL,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS bus_routes (
    bus_stop_code TEXT NOT NULL REFERENCES bus_stops (bus_stop_code) ON DELETE CASCADE,
    service_no TEXT NOT NULL,
    operator TEXT NOT NULL,
    direction INTEGER NOT NULL,
    stop_sequence INTEGER NOT NULL,
    distance REAL,
    PRIMARY KEY (bus_stop_code, service_no)
);

CREATE TABLE IF NOT EXISTS bus_route_times (
    bus_stop_code TEXT NOT NULL,
    service_no TEXT NOT NULL,
    day_type TEXT NOT NULL CHECK (day_type IN ('WD', 'SAT', 'SUN')),
    first_bus TEXT NOT NULL,
    last_bus TEXT NOT NULL,
    PRIMARY KEY (bus_stop_code, service_no, day_type),
    FOREIGN KEY (bus_stop_code, service_no)
        REFERENCES bus_routes (bus_stop_code, service_no) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_bus_routes_service_no ON bus_routes (service_no);
"""


def _windows(detail: RouteDetail) -> tuple[tuple[DayType, ScheduleWindow], ...]:
    return (
        ("WD", detail.weekday_first_last),
        ("SAT", detail.saturday_first_last),
        ("SUN", detail.sunday_first_last),
    )


def project_rows(stops: Mapping[str, StopAggregate]) -> NetworkRows:
    rows = NetworkRows()
    for code in sorted(stops):
        entry = stops[code]
        rows.stops.append(StopRow(**entry.stop.model_dump()))
        for service_no in sorted(entry.services):
            detail = entry.services[service_no]
            rows.routes.append(
                RouteRow(
                    stop_code=code,
                    service_no=service_no,
                    operator=detail.operator,
                    direction=detail.direction,
                    stop_sequence=detail.stop_sequence,
                    distance=detail.distance,
                )
            )
            rows.schedules.extend(
                ScheduleRow(
                    stop_code=code,
                    service_no=service_no,
                    day_type=day_type,
                    first_bus=window.first_bus,
                    last_bus=window.last_bus,
                )
                for day_type, window in _windows(detail)
            )
    return rows
