"""Foursquare Places client — hotels near the destination, best rated first."""

import logging

import httpx

from tripchat.services.http_client import PROVIDER_EXCEPTIONS, ProviderClient
from tripchat.services.models import Coordinates, Hotel
from tripchat.services.result import Ok, Result, not_found, provider_error

logger = logging.getLogger(__name__)

HOTEL_CATEGORY_ID = "19014"  # Foursquare taxonomy: Travel and Transportation > Lodging > Hotel
MAX_HOTELS = 5
RESULT_FIELDS = "fsq_id,name,rating,location,categories"


def _address(location: dict) -> str:
    if location.get("formatted_address"):
        return location["formatted_address"]
    parts = [location.get("address"), location.get("locality"), location.get("country")]
    return ", ".join(p for p in parts if p) or "Address unavailable"


def _to_hotel(place: dict) -> Hotel:
    categories = place.get("categories") or []
    rating = place.get("rating")
    return Hotel(
        name=place["name"],
        rating=str(rating) if rating is not None else "N/A",
        address=_address(place.get("location") or {}),
        category=(categories[0].get("name") if categories else None) or "Hotel",
        link=f"https://foursquare.com/v/{place['fsq_id']}",
    )


class FoursquareClient(ProviderClient):
    """Adapter for Foursquare Places API v3 search."""

    name = "foursquare"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.foursquare.com",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url,
            timeout=timeout,
            headers={"Authorization": api_key, "Accept": "application/json"},
            transport=transport,
        )

    async def find_hotels(self, near: Coordinates, limit: int = MAX_HOTELS) -> Result[list[Hotel]]:
        """Hotels around a point, ranked by the provider's rating sort."""
        try:
            data = await self._get_json(
                "/v3/places/search",
                params={
                    "ll": f"{near.lat},{near.lon}",
                    "categories": HOTEL_CATEGORY_ID,
                    "sort": "RATING",
                    "limit": limit,
                    "fields": RESULT_FIELDS,
                },
            )
            results = data.get("results") or []
            if not results:
                return not_found(self.name, "No hotels found near the destination.")

            return Ok([_to_hotel(place) for place in results[:limit]])

        except PROVIDER_EXCEPTIONS as e:
            logger.error(f"Error fetching hotels from Foursquare: {e}")
            return provider_error(self.name, "Failed to get hotels from Foursquare.")
