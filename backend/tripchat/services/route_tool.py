"""The get_route tool — descriptor exposed to the LLM and the function it runs."""

import logging

from tripchat.config import settings
from tripchat.services.plan_renderer import render_plan
from tripchat.services.result import Err
from tripchat.services.travel_planner import TravelPlanner, travel_planner

logger = logging.getLogger(__name__)

TOOL_NAME = "get_route"

TOOL_DESCRIPTION = (
    "Get the best route between origin and destination using the Mapbox API and provide "
    "detailed directions, places encountered along the way, and a Google Maps link for "
    "interactive directions. Additionally, recommend popular places to visit at the "
    "destination, a short history of the destination from Wikipedia, and nearby hotels."
)

ROUTE_TOOL_ERROR_MESSAGE = "There was an error retrieving route and place information."


def tool_parameters(travel_modes: list[str]) -> dict:
    """JSON schema for the tool arguments, shared by every LLM provider."""
    return {
        "type": "object",
        "properties": {
            "origin": {"type": "string", "description": "Where the trip starts, e.g. 'San Francisco'"},
            "destination": {"type": "string", "description": "Where the trip ends, e.g. 'Yosemite'"},
            "travelMode": {
                "type": "string",
                "enum": travel_modes,
                "description": f"How the user travels. Defaults to {settings.default_travel_mode}.",
            },
        },
        "required": ["origin", "destination"],
    }


def openai_tool_spec(travel_modes: list[str]) -> dict:
    return {
        "type": "function",
        "function": {
            "name": TOOL_NAME,
            "description": TOOL_DESCRIPTION,
            "parameters": tool_parameters(travel_modes),
        },
    }


def anthropic_tool_spec(travel_modes: list[str]) -> dict:
    return {
        "name": TOOL_NAME,
        "description": TOOL_DESCRIPTION,
        "input_schema": tool_parameters(travel_modes),
    }


async def run_get_route(arguments: dict, planner: TravelPlanner | None = None) -> str:
    """Execute get_route and return the text the LLM should relay."""
    origin = (arguments.get("origin") or "").strip()
    destination = (arguments.get("destination") or "").strip()
    travel_mode = (
        arguments.get("travelMode")
        or arguments.get("travel_mode")
        or settings.default_travel_mode
    )
    logger.info(f"User input for directions: {origin!r} -> {destination!r} ({travel_mode})")

    if not origin or not destination:
        return "Please provide both an origin and a destination."

    allowed_modes = settings.travel_mode_list
    if travel_mode not in allowed_modes:
        return f"Unsupported travel mode '{travel_mode}'. Choose one of: {', '.join(allowed_modes)}."

    try:
        result = await (planner or travel_planner).plan(origin, destination, travel_mode)
    except Exception as e:
        logger.error(f"Error in fetching directions and places: {e}", exc_info=True)
        return ROUTE_TOOL_ERROR_MESSAGE

    if isinstance(result, Err):
        return result.message
    return render_plan(result.value)
