import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime

import httpx

from ltabus.core.config import Settings
from ltabus.core.credentials import CredentialSource
from ltabus.models.datamall import BusArrivalPayload, NextBusItem
from ltabus.models.transit import ArrivalEstimate, ArrivalSnapshot, SkippedSlot, SlotLabel
from ltabus.services.datamall import DataMallFetcher, get_document

logger = logging.getLogger(__name__)

SLOTS: tuple[tuple[SlotLabel, str], ...] = (
    ("next", "next_bus"),
    ("next2", "next_bus2"),
    ("next3", "next_bus3"),
)
WHEELCHAIR_FEATURE = "WAB"

RFC3339_TIMESTAMP = re.compile(
    r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_estimated_arrival(value: str) -> datetime:
    """Parse an RFC 3339 timestamp such as ``2024-08-13T16:45:32+08:00``.

    ISO 8601 variants that RFC 3339 excludes (basic format, week dates, no
    offset) are rejected with ``ValueError``.
    """
    text = value.strip()
    if not RFC3339_TIMESTAMP.fullmatch(text):
        raise ValueError(f"timestamp {value!r} is not RFC 3339 with a UTC offset")
    return datetime.fromisoformat(text)


def minutes_until_arrival(estimated: datetime, now: datetime) -> int:
    seconds = (estimated - now).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)


def _estimate(bus: NextBusItem, estimated: datetime, now: datetime) -> ArrivalEstimate:
    return ArrivalEstimate(
        minutes_until_arrival=minutes_until_arrival(estimated, now),
        vehicle_type=bus.vehicle_type,
        wheelchair_accessible=bus.feature == WHEELCHAIR_FEATURE,
        load_level=bus.load,
    )


def build_snapshot(stop_code: str, payload: BusArrivalPayload, now: datetime) -> ArrivalSnapshot:
    """Turn an arrivals payload into per-service estimates relative to ``now``.

    Missing slots, and slots DataMall sends with an empty ``EstimatedArrival``,
    are left out. A slot whose timestamp cannot be parsed is left out too and
    listed in ``skipped``; the rest of the snapshot is still returned.
    """
    if now.utcoffset() is None:
        raise ValueError("now must be a timezone-aware datetime")
    snapshot = ArrivalSnapshot(stop_code=stop_code)
    for service in payload.services:
        slots: dict[SlotLabel, ArrivalEstimate] = {}
        for label, attr in SLOTS:
            bus: NextBusItem | None = getattr(service, attr)
            if bus is None or not bus.estimated_arrival.strip():
                continue
            try:
                estimated = parse_estimated_arrival(bus.estimated_arrival)
            except ValueError as exc:
                logger.warning(
                    "Skipping %s/%s: %s",
                    service.service_no,
                    label,
                    exc,
                    extra={"stop_code": stop_code},
                )
                snapshot.skipped.append(
                    SkippedSlot(
                        service_no=service.service_no,
                        slot=label,
                        estimated_arrival=bus.estimated_arrival,
                        reason=str(exc),
                    )
                )
                continue
            slots[label] = _estimate(bus, estimated, now)
        snapshot.services[service.service_no] = slots
    return snapshot


class ArrivalFetcher(DataMallFetcher):
    def __init__(
        self,
        settings: Settings | None = None,
        credentials: CredentialSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(settings, credentials, transport)
        self.clock = clock

    async def fetch(self, stop_code: str) -> ArrivalSnapshot:
        async with self._open_client() as client:
            payload = await get_document(
                client,
                self.settings.arrivals_url,
                BusArrivalPayload,
                params={"BusStopCode": stop_code},
            )
        return build_snapshot(stop_code, payload, self.clock())
