import logging
from collections.abc import Iterable

from ltabus.models.datamall import BusStopItem
from ltabus.models.transit import StopAggregate, StopRecord
from ltabus.services.datamall import DataMallFetcher, fetch_all_pages

logger = logging.getLogger(__name__)


def build_stop_map(items: Iterable[BusStopItem]) -> dict[str, StopAggregate]:
    """Key stops by code with empty service maps; a repeated code keeps the last record."""
    return {
        item.bus_stop_code: StopAggregate(
            stop=StopRecord(
                code=item.bus_stop_code,
                road_name=item.road_name,
                description=item.description,
                latitude=item.latitude,
                longitude=item.longitude,
            )
        )
        for item in items
    }


class StopFetcher(DataMallFetcher):
    async def fetch(self) -> dict[str, StopAggregate]:
        async with self._open_client() as client:
            items = await fetch_all_pages(client, self.settings.stops_url_template, BusStopItem)
        stops = build_stop_map(items)
        logger.info("Loaded %d bus stops from %d records", len(stops), len(items))
        return stops
