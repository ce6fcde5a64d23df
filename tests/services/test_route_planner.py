"""Tests for the full route pipeline and stale-run handling."""

from __future__ import annotations

import asyncio

import pytest

from tripcore.contracts.city import City, HomeLocation
from tripcore.services.geo import haversine_km
from tripcore.services.route_planner import RoutePlanner

from tests.services.fake_directions import FakeDirections, road

A = City(id="a", name="A", latitude=0.0, longitude=0.0, order=0)
B = City(id="b", name="B", latitude=0.0, longitude=10.0, order=1)
EXPECTED_AB_KM = haversine_km(0.0, 0.0, 0.0, 10.0)


def flight_then_car(**_):
    return ["flight", "car"]


class TestScenarios:
    @pytest.mark.asyncio
    async def test_long_leg_inferred_as_flight(self):
        directions = FakeDirections(default=road((0, 0), (10, 0)))
        planner = RoutePlanner(directions, suggest=flight_then_car)
        route = await planner.compute([A, B])

        assert len(route.legs) == 1
        leg = route.legs[0]
        assert leg.mode == "flight"
        assert leg.was_inferred is True
        assert leg.geometry == [(0.0, 0.0), (10.0, 0.0)]
        assert directions.calls == []

        features = route.route_geojson.features
        assert len(features) == 1
        assert features[0].geometry.coordinates == [(0.0, 0.0), (10.0, 0.0)]
        assert route.total_distance_km == pytest.approx(1112, abs=1)
        assert route.loading is False

    @pytest.mark.asyncio
    async def test_forced_car_without_route_is_gap(self):
        b_car = B.model_copy(update={"transport_mode": "car"})
        planner = RoutePlanner(FakeDirections(default=None), suggest=flight_then_car)
        route = await planner.compute([A, b_car])

        leg = route.legs[0]
        assert leg.mode == "car"
        assert leg.was_inferred is False
        assert leg.used_fallback is True
        assert leg.geometry is None
        assert leg.is_sea_like is True
        assert route.route_geojson.features == []
        assert route.total_distance_km == pytest.approx(EXPECTED_AB_KM)
        assert route.per_leg_distance_km == {"a-b": pytest.approx(EXPECTED_AB_KM)}

    @pytest.mark.asyncio
    async def test_explicit_train_kept_regardless_of_distance(self):
        b_train = B.model_copy(update={"transport_mode": "train"})
        directions = FakeDirections(default=road((0, 0), (5, 0), (10, 0), distance_km=1250.0))
        route = await RoutePlanner(directions, suggest=flight_then_car).compute([A, b_train])
        assert route.legs[0].mode == "train"
        assert route.total_distance_km == 1250.0
        assert len(directions.calls) == 1


class TestHomeLegs:
    @pytest.mark.asyncio
    async def test_order_and_total_include_home(self):
        home = HomeLocation(latitude=1.0, longitude=1.0)
        directions = FakeDirections(default=None)
        route = await RoutePlanner(directions, suggest=lambda **_: ["car"]).compute([B, A], home)

        assert [leg.key for leg in route.legs] == ["home-a", "a-b", "b-home"]
        assert list(route.per_leg_distance_km) == ["home-a", "a-b", "b-home"]
        assert route.total_distance_km == pytest.approx(sum(route.per_leg_distance_km.values()))
        assert all(leg.used_fallback for leg in route.legs)

    @pytest.mark.asyncio
    async def test_missing_coordinates_only_reduce_total(self):
        c = City(id="c", name="C", latitude=1.0, longitude=10.0, order=2)
        planner = RoutePlanner(FakeDirections(default=None), suggest=lambda **_: ["car"])
        full = await planner.compute([A, B, c])
        void_c = c.model_copy(update={"latitude": None})
        partial = await planner.compute([A, B, void_c])
        assert [leg.key for leg in partial.legs] == ["a-b"]
        assert partial.total_distance_km < full.total_distance_km

    @pytest.mark.asyncio
    async def test_no_legs(self):
        route = await RoutePlanner(FakeDirections()).compute([A])
        assert route.legs == []
        assert route.route_geojson.features == []
        assert route.total_distance_km == 0.0


class TestStaleRuns:
    @pytest.mark.asyncio
    async def test_only_newest_run_published(self):
        slow_gate = asyncio.Event()
        published = []

        class GatedDirections(FakeDirections):
            async def get_route_directions(self, lat1, lon1, lat2, lon2, profile="driving"):
                # the first run's leg ends at B; hold it until released
                if (lat2, lon2) == (0.0, 10.0):
                    await slow_gate.wait()
                return await super().get_route_directions(lat1, lon1, lat2, lon2, profile)

        directions = GatedDirections(default=None)
        planner = RoutePlanner(
            directions, suggest=lambda **_: ["car"], on_publish=published.append
        )

        c = City(id="c", name="C", latitude=0.0, longitude=0.5, order=1)
        stale = asyncio.create_task(planner.recompute([A, B]))
        await asyncio.sleep(0)
        assert planner.loading is True

        fresh = await planner.recompute([A, c])
        assert fresh is not None
        assert planner.loading is False

        slow_gate.set()
        assert await stale is None

        assert len(published) == 1
        assert [leg.key for leg in published[0].legs] == ["a-c"]
        assert [leg.key for leg in planner.latest.legs] == ["a-c"]
        assert planner.generation == 2

    @pytest.mark.asyncio
    async def test_newer_run_hides_loading_of_older(self):
        gate = asyncio.Event()
        planner = RoutePlanner(FakeDirections(default=None, gate=gate), suggest=lambda **_: ["car"])
        first = asyncio.create_task(planner.recompute([A, B]))
        await asyncio.sleep(0)
        second = asyncio.create_task(planner.recompute([A, B]))
        await asyncio.sleep(0)
        assert planner.loading is True
        gate.set()
        assert await first is None
        assert await second is not None
        assert planner.loading is False

    @pytest.mark.asyncio
    async def test_async_publish_callback_awaited(self):
        seen = []

        async def publish(route):
            seen.append(route.total_distance_km)

        planner = RoutePlanner(FakeDirections(), suggest=flight_then_car, on_publish=publish)
        await planner.recompute([A, B])
        assert seen == [pytest.approx(EXPECTED_AB_KM)]
