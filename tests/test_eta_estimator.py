"""
Tests for arrival estimation and traffic classification.
"""

from datetime import datetime

import pytest

from app.models.eta import Coordinates, TrafficLevel
from app.services.routing.eta_estimator import ETAEstimator, classify_traffic
from tests.fakes import StaticRoutingProvider, route_body

ORIGIN = Coordinates(lat=6.5244, lng=3.3792)
DESTINATION = Coordinates(lat=6.4550, lng=3.3941)
FIXED_NOW = datetime(2026, 10, 18, 10, 0, 0)


def estimator_for(provider):
    return ETAEstimator(provider, clock=lambda: FIXED_NOW)


class TestClassifyTraffic:

    def test_heavy_above_thirty_percent(self):
        congestion = ["heavy"] * 4 + ["low"] * 6
        assert classify_traffic(congestion) == TrafficLevel.HEAVY

    def test_moderate_above_ten_percent(self):
        congestion = ["heavy"] * 2 + ["low"] * 8
        assert classify_traffic(congestion) == TrafficLevel.MODERATE

    def test_light_without_heavy_segments(self):
        assert classify_traffic(["low", "moderate", "unknown"] * 3 + ["low"]) == TrafficLevel.LIGHT

    def test_severe_counts_as_heavy(self):
        congestion = ["severe"] * 2 + ["heavy"] * 2 + ["low"] * 6
        assert classify_traffic(congestion) == TrafficLevel.HEAVY

    def test_exact_thresholds_round_down(self):
        assert classify_traffic(["heavy"] * 3 + ["low"] * 7) == TrafficLevel.MODERATE
        assert classify_traffic(["heavy"] + ["low"] * 9) == TrafficLevel.LIGHT

    def test_no_segments_is_light(self):
        assert classify_traffic([]) == TrafficLevel.LIGHT


class TestEstimate:

    @pytest.mark.asyncio
    async def test_missing_endpoints_skip_the_network(self):
        provider = StaticRoutingProvider(route_body())
        estimator = estimator_for(provider)

        assert await estimator.estimate(None, DESTINATION) is None
        assert await estimator.estimate(ORIGIN, None) is None
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_disabled_provider_skips_the_network(self):
        provider = StaticRoutingProvider(route_body(), enabled=False)

        assert await estimator_for(provider).estimate(ORIGIN, DESTINATION) is None
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_duration_is_rounded_up(self):
        provider = StaticRoutingProvider(route_body(duration=125, distance=2300.5))

        result = await estimator_for(provider).estimate(ORIGIN, DESTINATION)

        assert result.duration_minutes == 3
        assert result.distance_meters == 2300.5
        assert result.arrival_time == "10:02"
        assert result.traffic_level == TrafficLevel.LIGHT
        assert provider.calls == [(ORIGIN, DESTINATION)]

    @pytest.mark.asyncio
    async def test_whole_minutes_are_not_bumped(self):
        provider = StaticRoutingProvider(route_body(duration=600))

        result = await estimator_for(provider).estimate(ORIGIN, DESTINATION)

        assert result.duration_minutes == 10
        assert result.arrival_time == "10:10"

    @pytest.mark.asyncio
    async def test_traffic_level_comes_from_first_leg(self):
        body = route_body(congestion=["heavy"] * 4 + ["low"] * 6)
        body["routes"][0]["legs"].append({"annotation": {"congestion": ["low"] * 10}})

        result = await estimator_for(StaticRoutingProvider(body)).estimate(ORIGIN, DESTINATION)

        assert result.traffic_level == TrafficLevel.HEAVY

    @pytest.mark.asyncio
    async def test_provider_failure_resolves_to_none(self):
        provider = StaticRoutingProvider(error=ConnectionError("network down"))

        assert await estimator_for(provider).estimate(ORIGIN, DESTINATION) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        None,
        {},
        {"routes": []},
        {"routes": [{"distance": 100}]},
        {"routes": "not-a-list"},
        {"routes": [{"duration": -120, "distance": 100}]},
        {"routes": [{"duration": 125, "distance": -1}]},
        ["not", "a", "dict"],
    ])
    async def test_unusable_bodies_resolve_to_none(self, body):
        assert await estimator_for(StaticRoutingProvider(body)).estimate(ORIGIN, DESTINATION) is None


    @pytest.mark.asyncio
    @pytest.mark.parametrize("legs", [
        [{"annotation": "n/a"}],
        {"0": {}},
        [{"annotation": {"congestion": 7}}],
        "legs",
        [],
    ])
    async def test_odd_leg_shapes_fall_back_to_light_traffic(self, legs):
        body = {"routes": [{"duration": 125, "distance": 900, "legs": legs}]}

        result = await estimator_for(StaticRoutingProvider(body)).estimate(ORIGIN, DESTINATION)

        assert result.duration_minutes == 3
        assert result.traffic_level == TrafficLevel.LIGHT

    @pytest.mark.asyncio
    async def test_parse_errors_resolve_to_none(self):
        estimator = estimator_for(StaticRoutingProvider({"routes": [{"duration": float("nan")}]}))

        assert await estimator.estimate(ORIGIN, DESTINATION) is None


class TestParseRouteResponse:

    def test_tolerates_missing_optional_fields(self):
        result = estimator_for(StaticRoutingProvider()).parse_route_response({"routes": [{"duration": 59}]})

        assert result.duration_minutes == 1
        assert result.distance_meters == 0.0
        assert result.traffic_level == TrafficLevel.LIGHT

    def test_crosses_midnight(self):
        estimator = ETAEstimator(StaticRoutingProvider(), clock=lambda: datetime(2026, 10, 18, 23, 50))

        result = estimator.parse_route_response(route_body(duration=1200))

        assert result.arrival_time == "00:10"
