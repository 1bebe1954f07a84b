"""Tests for route generation."""

import random

import pytest

from access_nav.models import RouteProfile, RouteResult
from access_nav.routing import (
    assemble_route,
    fallback_route,
    generate_route,
    narrate_route,
    order_waypoints,
    route_metrics,
    select_waypoints,
    smooth_route,
)
from access_nav.routing.assembler import JITTER_DEGREES
from access_nav.routing.narrator import find_nearby_place
from access_nav.routing.selector import is_on_the_way
from access_nav.utils.geo import distance_between, interpolate

from conftest import DESTINATION, ORIGIN, make_place


def north_route(points=21, step=0.001, start=(13.0, 80.0)):
    return [(start[0] + step * i, start[1]) for i in range(points)]


class TestWaypointSelector:
    """Test filtering and ranking of candidate places."""

    def test_empty_candidates(self):
        assert select_waypoints(ORIGIN, DESTINATION, []) == []

    def test_in_band_place_beats_richer_out_of_band_place(self):
        """A place far off the path is dropped whatever its feature count."""
        on_the_way = make_place(1, 13.045, 80.225, ["Ramp", "Elevator", "Handrails"])
        off_the_way = make_place(2, 13.06, 80.25, ["Ramp", "Elevator", "Handrails", "Tactile Paving", "Wheelchair Access"])

        selected = select_waypoints(ORIGIN, DESTINATION, [off_the_way, on_the_way])

        assert selected == [on_the_way]

    def test_more_features_rank_first(self):
        few = make_place(1, 13.045, 80.225, ["Elevator"])
        many = make_place(2, 13.046, 80.224, ["Elevator", "Handrails"])

        assert select_waypoints(ORIGIN, DESTINATION, [few, many]) == [many, few]

    def test_wheelchair_profile_prefers_ramps(self):
        """With equal feature counts, a ramp wins over a smaller detour."""
        midpoint = make_place(1, 13.045, 80.225, ["Elevator", "Handrails"])
        ramp = make_place(2, 13.0452, 80.2252, ["Wheelchair Ramp", "Elevator"])

        assert select_waypoints(ORIGIN, DESTINATION, [midpoint, ramp], "wheelchair") == [ramp, midpoint]
        assert select_waypoints(ORIGIN, DESTINATION, [midpoint, ramp], RouteProfile.ACCESSIBLE) == [midpoint, ramp]

    def test_at_most_five_and_all_in_band(self):
        candidates = [
            make_place(i, 13.041 + 0.001 * i, 80.229 - 0.001 * i, ["Ramp"] * (i % 3))
            for i in range(8)
        ] + [make_place(99, 13.2, 80.4, ["Ramp"] * 6)]

        selected = select_waypoints(ORIGIN, DESTINATION, candidates)

        assert len(selected) == 5
        assert all(is_on_the_way(ORIGIN, DESTINATION, place) for place in selected)

    def test_coincident_origin_and_destination(self):
        here = make_place(1, *ORIGIN, ["Ramp"])
        elsewhere = make_place(2, 13.041, 80.231, ["Ramp"])

        assert select_waypoints(ORIGIN, ORIGIN, [here, elsewhere]) == [here]


class TestRouteAssembler:
    """Test waypoint ordering and smoothing."""

    def test_greedy_nearest_neighbor_order(self):
        far = make_place(3, 13.0, 80.003)
        near = make_place(1, 13.0, 80.001)
        middle = make_place(2, 13.0, 80.002)

        ordered = order_waypoints((13.0, 80.0), [far, near, middle])

        assert [p.id for p in ordered] == [1, 2, 3]

    def test_no_waypoints_gives_endpoints_plus_smoothing(self):
        route = assemble_route(ORIGIN, DESTINATION, [], rng=random.Random(1))

        assert len(route) == 6
        assert route[0] is ORIGIN
        assert route[-1] is DESTINATION

    def test_waypoints_are_route_vertices(self):
        a = make_place(1, 13.043, 80.227)
        b = make_place(2, 13.047, 80.223)

        route = assemble_route(ORIGIN, DESTINATION, [b, a], jitter=0)

        assert len(route) == 16
        assert route[5] == a.point
        assert route[10] == b.point

    def test_unjittered_smoothing_is_linear(self):
        route = smooth_route([ORIGIN, DESTINATION], jitter=0)

        for k in range(1, 5):
            assert route[k] == interpolate(ORIGIN, DESTINATION, k / 5)

    def test_jitter_stays_within_bounds(self):
        route = smooth_route([ORIGIN, DESTINATION], rng=random.Random(7))

        for k in range(1, 5):
            expected = interpolate(ORIGIN, DESTINATION, k / 5)
            assert abs(route[k][0] - expected[0]) <= JITTER_DEGREES + 1e-12
            assert abs(route[k][1] - expected[1]) <= JITTER_DEGREES + 1e-12

    def test_endpoints_untouched_for_any_seed(self):
        for seed in range(20):
            route = assemble_route(ORIGIN, DESTINATION, [make_place(1, 13.045, 80.225)], rng=random.Random(seed))
            assert route[0] == ORIGIN
            assert route[-1] == DESTINATION

    def test_empty_vertices(self):
        assert smooth_route([]) == []


class TestMetrics:
    """Test distance and duration."""

    def test_single_point_route(self):
        assert route_metrics([ORIGIN]) == (0, 0)

    def test_coincident_points(self):
        assert route_metrics([ORIGIN, ORIGIN]) == (0, 0)

    def test_duration_from_walking_speed(self):
        distance, duration = route_metrics([ORIGIN, DESTINATION])

        assert distance == pytest.approx(distance_between(ORIGIN, DESTINATION))
        assert duration == pytest.approx(distance / 1.4)


class TestStepNarrator:
    """Test instruction generation."""

    def test_short_route_has_start_and_arrival(self):
        route = [(13.0, 80.0), (13.008, 80.0)]

        steps = narrate_route(route)

        assert [s.instruction for s in steps] == ["Head north on your route", "Arrive at your destination"]
        assert steps[0].distance == "890 m"
        assert steps[0].duration == "11 min"
        assert steps[1].distance == "890 m"

    def test_single_point_route(self):
        steps = narrate_route([ORIGIN])

        assert len(steps) == 2
        assert steps[-1].distance == "0 m"
        assert steps[-1].duration == "0 min"

    def test_left_turn_detected(self):
        north = north_route(points=11)
        corner = north[-1]
        west = [(corner[0], corner[1] - 0.001 * k) for k in range(1, 11)]

        steps = narrate_route(north + west)

        assert [s.instruction for s in steps] == [
            "Head north on your route",
            "Turn left and continue straight",
            "Arrive at your destination",
        ]
        assert steps[0].distance == "556 m"
        assert steps[0].duration == "7 min"
        assert steps[1].distance == "1.1 km"
        assert steps[2].distance == "1.1 km"
        assert all(s.is_accessible for s in steps)

    def test_straight_route_has_no_turns(self):
        steps = narrate_route(north_route())

        assert len(steps) == 2

    def test_nearby_place_is_announced(self):
        library = make_place(7, 13.010, 80.0002, ["Ramp", "Elevator"], name="Library")

        steps = narrate_route(north_route(), [library])

        assert len(steps) == 3
        assert steps[1].instruction == "Continue past Library. Note: Ramp, Elevator available."
        assert steps[1].is_accessible is True
        assert steps[1].distance == "1.1 km"

    def test_place_without_features_is_not_accessible(self):
        kiosk = make_place(8, 13.010, 80.0002, [], name="Kiosk")

        steps = narrate_route(north_route(), [kiosk])

        assert steps[1].is_accessible is False

    def test_first_nearby_place_wins(self):
        first = make_place(1, 13.0101, 80.0, name="First")
        second = make_place(2, 13.0100, 80.0, name="Second")

        assert find_nearby_place((13.010, 80.0), [first, second]) is first
        assert find_nearby_place((13.5, 80.0), [first, second]) is None

    def test_last_step_is_always_arrival(self):
        rng = random.Random(3)
        for points in range(1, 40):
            route = [(13.0 + rng.uniform(0, 0.01), 80.0 + rng.uniform(0, 0.01)) for _ in range(points)]
            steps = narrate_route(route)
            assert steps[0].instruction.startswith("Head ")
            assert steps[-1].instruction == "Arrive at your destination"


class TestGenerateRoute:
    """End-to-end route generation."""

    def test_no_places_wheelchair(self):
        result = generate_route(ORIGIN, DESTINATION, [], "wheelchair", rng=random.Random(11))
        direct = distance_between(ORIGIN, DESTINATION)

        assert isinstance(result, RouteResult)
        assert len(result.route) == 6
        assert result.route[0] == ORIGIN
        assert result.route[-1] == DESTINATION
        assert len(result.steps) == 2
        assert result.steps[0].instruction.startswith("Head ")
        assert result.steps[1].instruction == "Arrive at your destination"
        assert direct - 1e-6 <= result.distance < direct + 400
        assert result.duration == pytest.approx(result.distance / 1.4)

    def test_same_inputs_same_result_without_jitter(self):
        places = [make_place(1, 13.045, 80.225, ["Ramp"]), make_place(2, 13.047, 80.223, ["Elevator"])]

        first = generate_route(ORIGIN, DESTINATION, places, jitter=0)
        second = generate_route(ORIGIN, DESTINATION, places, jitter=0)

        assert first == second

    def test_same_seed_same_result(self):
        first = generate_route(ORIGIN, DESTINATION, [], rng=random.Random(5))
        second = generate_route(ORIGIN, DESTINATION, [], rng=random.Random(5))

        assert first == second

    def test_coincident_origin_and_destination(self):
        places = [make_place(1, 13.041, 80.231, ["Ramp"])]

        result = generate_route(ORIGIN, ORIGIN, places, jitter=0)

        assert result.distance == 0
        assert result.duration == 0
        assert result.steps[-1].instruction == "Arrive at your destination"

    def test_waypoints_lengthen_route_within_band(self):
        place = make_place(1, 13.0452, 80.2252, ["Ramp", "Elevator"])

        result = generate_route(ORIGIN, DESTINATION, [place], jitter=0)

        assert place.point in result.route
        assert len(result.route) == 11

    def test_fallback_route(self):
        result = fallback_route(ORIGIN, DESTINATION)

        assert len(result.route) == 11
        assert result.route[0] == ORIGIN
        assert result.route[-1] == DESTINATION
        assert [s.instruction for s in result.steps] == [
            "Head toward your destination",
            "Arrive at your destination",
        ]
        assert result.steps[1].distance == "0 m"
        assert result.steps[0].distance == "1.6 km"
