"""Wikipedia API client — popular places and historical background for a destination."""

import asyncio
import logging
from urllib.parse import quote

import httpx

from tripchat.services.http_client import PROVIDER_EXCEPTIONS, ProviderClient
from tripchat.services.models import HistoricalInfo, PopularPlace
from tripchat.services.result import Ok, Result, not_found, provider_error

logger = logging.getLogger(__name__)

MAX_POPULAR_PLACES = 5

ACTION_API = "/w/api.php"


class WikipediaClient(ProviderClient):
    """Adapter for the MediaWiki Action API and the REST page-summary endpoint."""

    name = "wikipedia"

    def __init__(
        self,
        base_url: str = "https://en.wikipedia.org",
        user_agent: str = "tripchat/0.1",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # Wikimedia rejects requests without an identifying User-Agent
        super().__init__(
            base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def _query(self, **params) -> dict:
        data = await self._get_json(
            ACTION_API,
            params={"action": "query", "format": "json", "formatversion": 2, **params},
        )
        return data.get("query") or {}

    async def _search(self, text: str, limit: int) -> list[dict]:
        query = await self._query(list="search", srsearch=text, srlimit=limit)
        return query.get("search") or []

    async def _page_summary(self, title: str) -> PopularPlace:
        data = await self._get_json(
            f"/api/rest_v1/page/summary/{quote(title.replace(' ', '_'), safe='')}"
        )
        return PopularPlace(
            title=data.get("title", title),
            description=data.get("extract", ""),
            url=data["content_urls"]["desktop"]["page"],
        )

    async def _page_extract(self, page_id: int) -> str:
        query = await self._query(
            prop="extracts", exintro=1, explaintext=1, pageids=page_id,
        )
        pages = query.get("pages") or [{}]
        return (pages[0].get("extract") or "").strip()

    async def _page_url(self, page_id: int) -> str:
        query = await self._query(prop="info", inprop="url", pageids=page_id)
        pages = query.get("pages") or [{}]
        # curid links resolve to the page even without a canonical title
        return pages[0].get("fullurl") or f"{self._base_url.rstrip('/')}/?curid={page_id}"

    async def get_popular_places(self, destination: str) -> Result[list[PopularPlace]]:
        """Top tourist attractions at a destination, in search-ranking order."""
        try:
            hits = await self._search(f"{destination} tourist attractions", MAX_POPULAR_PLACES)
            if not hits:
                return not_found(self.name, "No popular places found at the destination.")

            places = await asyncio.gather(
                *(self._page_summary(hit["title"]) for hit in hits[:MAX_POPULAR_PLACES])
            )
            return Ok(list(places))

        except PROVIDER_EXCEPTIONS as e:
            logger.error(f"Error fetching popular places from Wikipedia for {destination!r}: {e}")
            return provider_error(self.name, "Failed to get popular places from Wikipedia.")

    async def get_historical_info(self, destination: str) -> Result[HistoricalInfo]:
        """Intro extract and canonical URL of the best-matching page."""
        try:
            hits = await self._search(destination, 1)
            if not hits:
                return not_found(self.name, "No historical information found.")

            page_id = hits[0]["pageid"]
            summary, source = await asyncio.gather(
                self._page_extract(page_id),
                self._page_url(page_id),
            )
            if not summary:
                return not_found(self.name, "No historical information found.")

            return Ok(HistoricalInfo(summary=summary, source=source))

        except PROVIDER_EXCEPTIONS as e:
            logger.error(f"Error fetching historical info from Wikipedia for {destination!r}: {e}")
            return provider_error(self.name, "Failed to get historical information from Wikipedia.")
