"""Route router — runs the get_route tool directly, without the LLM."""

from fastapi import APIRouter, HTTPException

from tripchat.config import settings
from tripchat.schemas.chat import RouteRequest, RouteResponse
from tripchat.services.route_tool import run_get_route

router = APIRouter()


@router.post("/route", response_model=RouteResponse)
async def get_route(req: RouteRequest):
    """Plan a route and return the rendered travel plan."""
    travel_mode = req.travel_mode or settings.default_travel_mode
    if travel_mode not in settings.travel_mode_list:
        raise HTTPException(
            status_code=400,
            detail=f"travel_mode must be one of: {', '.join(settings.travel_mode_list)}",
        )

    text = await run_get_route({
        "origin": req.origin,
        "destination": req.destination,
        "travelMode": travel_mode,
    })
    return RouteResponse(text=text)
