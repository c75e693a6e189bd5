"""Renders a TravelPlan into the markdown text handed back to the LLM."""

from tripchat.services.models import Hotel, PopularPlace, RouteStep, TravelPlan

MAX_PLACES_ALONG_ROUTE = 5
NO_HISTORY_MESSAGE = "No historical information available."
NOTHING_FOUND = "None found."


def _route_step_line(index: int, step: RouteStep) -> str:
    return (
        f"{index}. {step.name}: {step.instruction} "
        f"({step.distance_meters:.2f} m, {int(step.duration_seconds // 60)} min)"
    )


def _popular_place_line(index: int, place: PopularPlace) -> str:
    return f"{index}. [{place.title}]({place.url}): {place.description}"


def _hotel_line(index: int, hotel: Hotel) -> str:
    return (
        f"{index}. {hotel.name} ({hotel.category}) - Rating: {hotel.rating} - "
        f"{hotel.address} - [View]({hotel.link})"
    )


def _numbered(lines: list[str]) -> str:
    return "\n".join(lines) if lines else NOTHING_FOUND


def render_plan(plan: TravelPlan) -> str:
    along_route = _numbered([
        _route_step_line(i, step)
        for i, step in enumerate(plan.places_along_route[:MAX_PLACES_ALONG_ROUTE], start=1)
    ])
    popular = _numbered([
        _popular_place_line(i, place) for i, place in enumerate(plan.popular_places, start=1)
    ])
    hotels = _numbered([
        _hotel_line(i, hotel) for i, hotel in enumerate(plan.hotels, start=1)
    ])

    if plan.historical_info:
        history = plan.historical_info.summary
        if plan.historical_info.source:
            history += f"\n\nSource: {plan.historical_info.source}"
    else:
        history = NO_HISTORY_MESSAGE

    return f"""Travel plan: {plan.origin} to {plan.destination} ({plan.travel_mode})

The best route from {plan.origin} to {plan.destination} will take approximately {plan.duration}, covering a distance of {plan.distance}.

Detailed directions: {plan.directions}

History of {plan.destination}:
{history}

Notable places along the route:
{along_route}

Popular places to visit at {plan.destination}:
{popular}

Recommended hotels near {plan.destination}:
{hotels}

You can view the interactive route map here:

- [Google Maps Directions]({plan.google_maps_url})

Note: This link opens the directions interface, allowing you to view the route and directions interactively."""
