"""Travel planner — resolves coordinates, then fans out to every travel-data provider."""

import asyncio
import logging
import time

from tripchat.config import Settings, settings
from tripchat.services.foursquare_client import FoursquareClient
from tripchat.services.mapbox_client import MapboxClient
from tripchat.services.models import Coordinates, TravelPlan
from tripchat.services.result import Err, Ok, Result, fatal, provider_error
from tripchat.services.wikipedia_client import WikipediaClient

logger = logging.getLogger(__name__)

COORDINATES_FAILED_MESSAGE = "Failed to get coordinates for origin or destination."

# Google Maps names some profiles differently
GOOGLE_TRAVEL_MODES = {
    "driving": "driving",
    "driving-traffic": "driving",
    "walking": "walking",
    "cycling": "bicycling",
}


def mapbox_directions_url(origin: Coordinates, destination: Coordinates, travel_mode: str) -> str:
    return (
        f"https://www.mapbox.com/directions/?start={origin.lon},{origin.lat}"
        f"&end={destination.lon},{destination.lat}&profile={travel_mode}"
    )


def google_maps_directions_url(origin: Coordinates, destination: Coordinates, travel_mode: str) -> str:
    return (
        f"https://www.google.com/maps/dir/?api=1&origin={origin.lat},{origin.lon}"
        f"&destination={destination.lat},{destination.lon}"
        f"&travelmode={GOOGLE_TRAVEL_MODES.get(travel_mode, 'driving')}"
    )


def _settle(outcome, provider: str) -> Result:
    """Normalise a gather(return_exceptions=True) slot into a Result."""
    if isinstance(outcome, BaseException):
        logger.error(f"{provider} lookup raised unexpectedly: {outcome!r}")
        return provider_error(provider, f"{provider} lookup failed.")
    return outcome


class TravelPlanner:
    """Coordinates geocoding, routing, places, history and hotel lookups for one trip."""

    def __init__(
        self,
        mapbox: MapboxClient,
        wikipedia: WikipediaClient,
        foursquare: FoursquareClient,
    ):
        self.mapbox = mapbox
        self.wikipedia = wikipedia
        self.foursquare = foursquare

    @classmethod
    def from_settings(cls, config: Settings) -> "TravelPlanner":
        timeout = config.provider_timeout_seconds
        return cls(
            mapbox=MapboxClient(
                access_token=config.mapbox_access_token,
                base_url=config.mapbox_base_url,
                timeout=timeout,
            ),
            wikipedia=WikipediaClient(
                base_url=config.wikipedia_base_url,
                user_agent=config.http_user_agent,
                timeout=timeout,
            ),
            foursquare=FoursquareClient(
                api_key=config.foursquare_api_key,
                base_url=config.foursquare_base_url,
                timeout=timeout,
            ),
        )

    async def plan(
        self,
        origin: str,
        destination: str,
        travel_mode: str = "driving",
    ) -> Result[TravelPlan]:
        """
        Build a travel plan from origin to destination.

        Phase 1 resolves both place names. Phase 2 runs routing, popular
        places, history and hotels concurrently. Only a coordinate or routing
        failure fails the plan; the other three fall back to empty values.
        """
        start_time = time.monotonic()

        # 1. Resolve coordinates
        origin_result, destination_result = await asyncio.gather(
            self.mapbox.geocode(origin),
            self.mapbox.geocode(destination),
        )
        if isinstance(origin_result, Err) or isinstance(destination_result, Err):
            logger.warning(f"Coordinate lookup failed for {origin!r} -> {destination!r}")
            return fatal(COORDINATES_FAILED_MESSAGE)

        origin_coords = origin_result.value
        destination_coords = destination_result.value

        # 2. Fan out; each slot settles independently
        outcomes = await asyncio.gather(
            self.mapbox.get_route(origin_coords, destination_coords, travel_mode),
            self.wikipedia.get_popular_places(destination),
            self.wikipedia.get_historical_info(destination),
            self.foursquare.find_hotels(destination_coords),
            return_exceptions=True,
        )
        route_result = _settle(outcomes[0], "mapbox")
        places_result = _settle(outcomes[1], "wikipedia")
        history_result = _settle(outcomes[2], "wikipedia")
        hotels_result = _settle(outcomes[3], "foursquare")

        # 3. Routing is the only fatal secondary failure
        if isinstance(route_result, Err):
            logger.warning(f"Routing failed for {origin!r} -> {destination!r}: {route_result.message}")
            return fatal(route_result.message)

        # 4. Degrade the rest
        popular_places = ()
        if isinstance(places_result, Ok):
            popular_places = tuple(places_result.value)
        else:
            logger.warning(f"Popular places unavailable for {destination!r}: {places_result.message}")

        historical_info = None
        if isinstance(history_result, Ok):
            historical_info = history_result.value
        else:
            logger.warning(f"Historical info unavailable for {destination!r}: {history_result.message}")

        hotels = ()
        if isinstance(hotels_result, Ok):
            hotels = tuple(hotels_result.value)
        else:
            logger.warning(f"Hotels unavailable for {destination!r}: {hotels_result.message}")

        route = route_result.value
        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"Planned {origin!r} -> {destination!r} ({travel_mode}) in {elapsed_ms}ms: "
            f"{len(popular_places)} places, {len(hotels)} hotels, "
            f"history={'yes' if historical_info else 'no'}"
        )

        return Ok(TravelPlan(
            origin=origin,
            destination=destination,
            travel_mode=travel_mode,
            duration=route.duration_text,
            distance=route.distance_text,
            directions=route.directions,
            places_along_route=route.steps,
            popular_places=popular_places,
            historical_info=historical_info,
            hotels=hotels,
            map_url=mapbox_directions_url(origin_coords, destination_coords, travel_mode),
            google_maps_url=google_maps_directions_url(origin_coords, destination_coords, travel_mode),
        ))

    async def close(self):
        await self.mapbox.close()
        await self.wikipedia.close()
        await self.foursquare.close()


travel_planner = TravelPlanner.from_settings(settings)
