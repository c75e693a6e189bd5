"""Mapbox API client — geocoding and turn-by-turn directions."""

import logging
from urllib.parse import quote

import httpx

from tripchat.services.http_client import PROVIDER_EXCEPTIONS, ProviderClient
from tripchat.services.models import Coordinates, RouteStep, RouteSummary
from tripchat.services.result import Ok, Result, not_found, provider_error

logger = logging.getLogger(__name__)

NO_ROUTES_MESSAGE = "No routes found. Please check the origin and destination."
ROUTE_FAILED_MESSAGE = "Failed to get route details from Mapbox."
DIRECTIONS_SEPARATOR = " -> "


def format_distance(meters: float) -> str:
    """1500 -> "1.50 km"."""
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: float) -> str:
    """125 -> "2 minutes" (floored)."""
    return f"{int(seconds // 60)} minutes"


class MapboxClient(ProviderClient):
    """Adapter for Mapbox Geocoding v5 and Directions v5."""

    name = "mapbox"

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout=timeout, transport=transport)
        self._access_token = access_token

    async def geocode(self, location: str) -> Result[Coordinates]:
        """Resolve a free-text place name to the top-ranked coordinates."""
        try:
            data = await self._get_json(
                f"/geocoding/v5/mapbox.places/{quote(location, safe='')}.json",
                params={"access_token": self._access_token, "limit": 1},
            )
            features = data.get("features") or []
            if not features:
                logger.info(f"Mapbox geocoding found nothing for {location!r}")
                return not_found(self.name, f"No coordinates found for {location}.")

            lon, lat = features[0]["geometry"]["coordinates"][:2]
            return Ok(Coordinates(lat=float(lat), lon=float(lon)))

        except PROVIDER_EXCEPTIONS as e:
            logger.error(f"Error fetching coordinates from Mapbox for {location!r}: {e}")
            return provider_error(self.name, f"Failed to geocode {location}.")

    async def get_route(
        self,
        origin: Coordinates,
        destination: Coordinates,
        travel_mode: str = "driving",
    ) -> Result[RouteSummary]:
        """Fetch the provider's best route and flatten its first leg."""
        path = (
            f"/directions/v5/mapbox/{travel_mode}/"
            f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        )
        try:
            data = await self._get_json(
                path,
                params={
                    "geometries": "geojson",
                    "overview": "full",
                    "steps": "true",
                    "access_token": self._access_token,
                },
            )
            routes = data.get("routes") or []
            if not routes:
                return not_found(self.name, NO_ROUTES_MESSAGE)

            best = routes[0]
            directions = []
            steps = []
            for step in best["legs"][0]["steps"]:
                instruction = step["maneuver"]["instruction"]
                directions.append(instruction)
                if step.get("name"):
                    steps.append(RouteStep(
                        name=step["name"],
                        instruction=instruction,
                        distance_meters=float(step.get("distance", 0)),
                        duration_seconds=float(step.get("duration", 0)),
                    ))

            return Ok(RouteSummary(
                duration_text=format_duration(best["duration"]),
                distance_text=format_distance(best["distance"]),
                directions=DIRECTIONS_SEPARATOR.join(directions),
                steps=tuple(steps),
            ))

        except PROVIDER_EXCEPTIONS as e:
            logger.error(f"Error fetching route details from Mapbox: {e}")
            return provider_error(self.name, ROUTE_FAILED_MESSAGE)
