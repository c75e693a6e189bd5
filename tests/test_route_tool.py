"""
Unit tests for services/route_tool.py
"""
from unittest.mock import AsyncMock, patch

from conftest import run
from tripchat.services.result import fatal
from tripchat.services.route_tool import (
    ROUTE_TOOL_ERROR_MESSAGE,
    TOOL_NAME,
    anthropic_tool_spec,
    openai_tool_spec,
    run_get_route,
)
from tripchat.services.travel_planner import TravelPlanner


def _planner(fake_providers):
    mapbox, wikipedia, foursquare = fake_providers
    return TravelPlanner(mapbox=mapbox, wikipedia=wikipedia, foursquare=foursquare)


class TestToolSpec:
    def test_openai_shape(self):
        spec = openai_tool_spec(["driving", "walking"])
        assert spec["type"] == "function"
        assert spec["function"]["name"] == TOOL_NAME
        params = spec["function"]["parameters"]
        assert params["required"] == ["origin", "destination"]
        assert params["properties"]["travelMode"]["enum"] == ["driving", "walking"]

    def test_anthropic_shape_shares_schema(self):
        spec = anthropic_tool_spec(["driving"])
        assert spec["name"] == TOOL_NAME
        assert spec["input_schema"] == openai_tool_spec(["driving"])["function"]["parameters"]


class TestRunGetRoute:
    def test_renders_plan(self, fake_providers):
        text = run(run_get_route(
            {"origin": "San Francisco", "destination": "Yosemite"},
            planner=_planner(fake_providers),
        ))
        assert text.startswith("Travel plan: San Francisco to Yosemite (driving)")
        assert "Half Dome" in text

    def test_defaults_to_configured_mode(self, fake_providers):
        with patch("tripchat.services.route_tool.settings") as mock_settings:
            mock_settings.default_travel_mode = "walking"
            mock_settings.travel_mode_list = ["walking"]
            run(run_get_route(
                {"origin": "San Francisco", "destination": "Yosemite"},
                planner=_planner(fake_providers),
            ))
        assert fake_providers[0].route_calls[0][2] == "walking"

    def test_fatal_failure_returns_message(self, fake_providers):
        text = run(run_get_route(
            {"origin": "Atlantis", "destination": "Yosemite", "travelMode": "driving"},
            planner=_planner(fake_providers),
        ))
        assert text == "Failed to get coordinates for origin or destination."

    def test_unsupported_mode_is_rejected_before_planning(self):
        planner = AsyncMock()
        text = run(run_get_route(
            {"origin": "A", "destination": "B", "travelMode": "teleport"}, planner=planner,
        ))
        assert text.startswith("Unsupported travel mode 'teleport'")
        planner.plan.assert_not_called()

    def test_missing_destination(self):
        planner = AsyncMock()
        text = run(run_get_route({"origin": "A"}, planner=planner))
        assert text == "Please provide both an origin and a destination."
        planner.plan.assert_not_called()

    def test_unexpected_exception_becomes_generic_message(self):
        planner = AsyncMock()
        planner.plan.side_effect = RuntimeError("kaboom")
        text = run(run_get_route({"origin": "A", "destination": "B"}, planner=planner))
        assert text == ROUTE_TOOL_ERROR_MESSAGE

    def test_uses_module_planner_by_default(self):
        with patch("tripchat.services.route_tool.travel_planner") as mock_planner:
            mock_planner.plan = AsyncMock(return_value=fatal("No routes found. Please check the origin and destination."))
            text = run(run_get_route({"origin": "A", "destination": "B", "travelMode": "cycling"}))

        mock_planner.plan.assert_awaited_once_with("A", "B", "cycling")
        assert text == "No routes found. Please check the origin and destination."
