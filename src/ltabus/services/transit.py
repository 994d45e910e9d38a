import logging
from functools import lru_cache

import httpx

from ltabus.core.config import Settings, get_settings
from ltabus.core.credentials import API_KEY_NAME, CredentialSource, SettingsCredentialSource
from ltabus.core.errors import ConfigError
from ltabus.models.transit import ArrivalSnapshot, NetworkRows, StopAggregate
from ltabus.services.arrivals import ArrivalFetcher
from ltabus.services.projection import project_rows
from ltabus.services.routes import RouteFetcher
from ltabus.services.stops import StopFetcher

logger = logging.getLogger(__name__)


class TransitService:
    """Entry point used by the HTTP layer; holds no data between calls."""

    def __init__(
        self,
        settings: Settings | None = None,
        credentials: CredentialSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.credentials = credentials or SettingsCredentialSource(self.settings)
        wiring = {
            "settings": self.settings,
            "credentials": self.credentials,
            "transport": transport,
        }
        self.stop_fetcher = StopFetcher(**wiring)
        self.route_fetcher = RouteFetcher(**wiring)
        self.arrival_fetcher = ArrivalFetcher(**wiring)

    async def load_network(self) -> dict[str, StopAggregate]:
        stops = await self.stop_fetcher.fetch()
        network = await self.route_fetcher.fetch(stops)
        logger.info(
            "Bus network ready: %d stops, %d stop services",
            len(network),
            sum(len(entry.services) for entry in network.values()),
        )
        return network

    async def load_rows(self) -> NetworkRows:
        return project_rows(await self.load_network())

    async def get_arrivals(self, stop_code: str) -> ArrivalSnapshot:
        return await self.arrival_fetcher.fetch(stop_code)

    def has_credentials(self) -> bool:
        try:
            self.credentials.get(API_KEY_NAME)
        except ConfigError:
            return False
        return True


@lru_cache
def get_transit_service() -> TransitService:
    return TransitService()
