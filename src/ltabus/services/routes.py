import logging
from collections.abc import Iterable, Mapping

from ltabus.models.datamall import BusRouteItem
from ltabus.models.transit import RouteDetail, ScheduleWindow, StopAggregate
from ltabus.services.datamall import DataMallFetcher, fetch_all_pages

logger = logging.getLogger(__name__)


def route_detail(item: BusRouteItem) -> RouteDetail:
    return RouteDetail(
        operator=item.operator,
        direction=item.direction,
        stop_sequence=item.stop_sequence,
        distance=item.distance,
        weekday_first_last=ScheduleWindow(first_bus=item.wd_first_bus, last_bus=item.wd_last_bus),
        saturday_first_last=ScheduleWindow(
            first_bus=item.sat_first_bus, last_bus=item.sat_last_bus
        ),
        sunday_first_last=ScheduleWindow(first_bus=item.sun_first_bus, last_bus=item.sun_last_bus),
    )


def join_routes(
    stops: Mapping[str, StopAggregate], routes: Iterable[BusRouteItem]
) -> dict[str, StopAggregate]:
    """Attach route records to their stops and return a new aggregate map.

    ``stops`` is left untouched. Records whose stop code is not in ``stops`` are
    dropped; only their count is logged. A service seen twice at the same stop
    keeps the later record.
    """
    joined = {
        code: entry.model_copy(update={"services": dict(entry.services)})
        for code, entry in stops.items()
    }
    dropped = 0
    for item in routes:
        entry = joined.get(item.bus_stop_code)
        if entry is None:
            dropped += 1
            continue
        entry.services[item.service_no] = route_detail(item)

    if dropped:
        logger.info("Dropped %d route records for unknown bus stops", dropped)
    return joined


class RouteFetcher(DataMallFetcher):
    async def fetch(self, stops: Mapping[str, StopAggregate]) -> dict[str, StopAggregate]:
        async with self._open_client() as client:
            items = await fetch_all_pages(client, self.settings.routes_url_template, BusRouteItem)
        logger.info("Loaded %d bus route records", len(items))
        return join_routes(stops, items)
