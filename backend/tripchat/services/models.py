"""Lean travel-data models mapped from provider responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class RouteStep:
    """One named maneuver along the route, in travel order."""
    name: str
    instruction: str
    distance_meters: float
    duration_seconds: float


@dataclass(frozen=True)
class RouteSummary:
    """Best route between two points, already formatted for display."""
    duration_text: str                 # "42 minutes"
    distance_text: str                 # "35.20 km"
    directions: str                    # every instruction joined by " -> "
    steps: tuple[RouteStep, ...] = ()  # named steps only


@dataclass(frozen=True)
class PopularPlace:
    title: str
    description: str
    url: str


@dataclass(frozen=True)
class HistoricalInfo:
    summary: str
    source: str


@dataclass(frozen=True)
class Hotel:
    name: str
    rating: str      # provider rating as text, "N/A" when missing
    address: str
    category: str    # "Hotel" when the provider has none
    link: str


@dataclass(frozen=True)
class TravelPlan:
    """Aggregate of every provider's answer for one origin/destination request."""
    origin: str
    destination: str
    travel_mode: str
    duration: str
    distance: str
    directions: str
    places_along_route: tuple[RouteStep, ...]
    popular_places: tuple[PopularPlace, ...]
    historical_info: HistoricalInfo | None
    hotels: tuple[Hotel, ...]
    map_url: str
    google_maps_url: str
