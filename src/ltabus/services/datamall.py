"""HTTP access to LTA DataMall.

Listing endpoints (bus stops, bus routes) return at most ``PAGE_SIZE`` records
per call and are walked with the ``$skip`` offset until a short page comes
back. Every request is a single attempt; any failure aborts the operation.
"""

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ltabus.core.config import Settings, get_settings
from ltabus.core.credentials import API_KEY_NAME, CredentialSource, SettingsCredentialSource
from ltabus.core.errors import DecodeError, TransportError
from ltabus.models.datamall import DataMallModel, Page

logger = logging.getLogger(__name__)

PAGE_SIZE = 500

ModelT = TypeVar("ModelT", bound=BaseModel)
ItemT = TypeVar("ItemT", bound=DataMallModel)


async def get_document(
    client: httpx.AsyncClient,
    url: str,
    model: type[ModelT],
    params: dict[str, str] | None = None,
) -> ModelT:
    try:
        response = await client.get(url, params=params)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("DataMall request failed", exc_info=exc, extra={"url": url})
        raise TransportError(f"DataMall request failed: {exc.__class__.__name__}", url) from exc

    if not response.is_success:
        logger.error(
            "DataMall returned an error status",
            extra={"url": url, "status_code": response.status_code},
        )
        raise TransportError(
            f"DataMall returned HTTP {response.status_code}", url, response.status_code
        )

    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected DataMall payload ({exc.error_count()} validation errors)",
            url,
            response.text,
        ) from exc


async def fetch_all_pages(
    client: httpx.AsyncClient,
    url_template: str,
    item_model: type[ItemT],
    page_size: int = PAGE_SIZE,
) -> list[ItemT]:
    """Collect every record of a listing endpoint, in upstream order.

    ``url_template`` must contain a ``{skip}`` placeholder. Pages are requested
    one after another; a page shorter than ``page_size`` (an empty one
    included) ends the walk.
    """
    page_model = Page[item_model]  # type: ignore[valid-type]
    items: list[ItemT] = []
    skip = 0
    while True:
        url = url_template.format(skip=skip)
        page = await get_document(client, url, page_model)
        items.extend(page.value)
        logger.debug("Fetched %d records", len(page.value), extra={"url": url, "skip": skip})
        if len(page.value) < page_size:
            return items
        skip += page_size


class DataMallFetcher:
    """Shared wiring for the fetchers: settings, credentials and the HTTP client."""

    def __init__(
        self,
        settings: Settings | None = None,
        credentials: CredentialSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.credentials = credentials or SettingsCredentialSource(self.settings)
        self._transport = transport

    def _open_client(self) -> httpx.AsyncClient:
        # Resolving the key first means a missing credential never reaches the network.
        api_key = self.credentials.get(API_KEY_NAME)
        return httpx.AsyncClient(
            headers={"AccountKey": api_key, "Accept": "application/json"},
            timeout=self.settings.http_timeout_seconds,
            transport=self._transport,
        )
