"""Unit tests for wayfinder.pathfinding."""

from __future__ import annotations

import copy
import math

import pytest

from wayfinder.building import Location, LocationType, Position, building_from_payload
from wayfinder.pathfinding import (
    RouteStatus,
    dijkstra,
    find_path,
    find_route,
    nearest_path_node,
    reconstruct_path,
    route_weight,
)
from wayfinder.route_graph import build_route_graph
from wayfinder.sample_data import KIOSK_LOCATION, SAMPLE_BUILDING_PAYLOAD


def _point(floor: int, x: float, y: float, loc_id: str = "here") -> Location:
    return Location(id=loc_id, name=loc_id, type=LocationType.ROOM, floor=floor, position=Position(x, y))


def _all_simple_path_weights(graph, start: str, goal: str) -> list[float]:
    """Brute-force weights of every simple path (small graphs only)."""
    weights: list[float] = []

    def walk(node: str, seen: set[str], acc: float) -> None:
        if node == goal:
            weights.append(acc)
            return
        for nbr, w in graph.neighbors(node).items():
            if nbr not in seen:
                walk(nbr, seen | {nbr}, acc + w)

    walk(start, {start}, 0.0)
    return weights


def test_nearest_path_node_snaps_to_closest_on_same_floor(building) -> None:
    """Cafe sits 20 units below node-1-2."""
    cafe = building.find_location("cafe")
    assert nearest_path_node(building, cafe) == "node-1-2"


def test_nearest_path_node_tie_breaks_on_insertion_order(building) -> None:
    """Midpoint between node-1-1 and node-1-2 resolves to the first declared."""
    assert nearest_path_node(building, _point(1, 100, 80)) == "node-1-1"


def test_nearest_path_node_ignores_other_floors(building) -> None:
    """node-1-1 sits exactly at (50, 80) but belongs to floor 1."""
    assert nearest_path_node(building, _point(2, 50, 80)) == "node-2-1"


def test_nearest_path_node_unknown_floor_returns_none(building) -> None:
    assert nearest_path_node(building, _point(9, 0, 0)) is None


def test_direct_neighbors_route_is_two_nodes(building) -> None:
    """Reception and cafe resolve to directly connected nodes."""
    result = find_route(building, building.find_location("reception"), building.find_location("cafe"))

    assert result.status is RouteStatus.FOUND
    assert result.node_ids == ["node-1-1", "node-1-2"]
    assert result.total_weight == pytest.approx(100.0)


def test_same_location_route_is_degenerate(building) -> None:
    reception = building.find_location("reception")
    result = find_route(building, reception, reception)

    assert result.found
    assert result.node_ids == ["node-1-1"]
    assert result.total_weight == 0.0


def test_kiosk_to_conference_room_takes_stairs(building) -> None:
    """The stairs core beats the elevator for the conference room."""
    result = find_route(building, KIOSK_LOCATION, building.find_location("meeting-2"))

    assert result.node_ids == [
        "node-1-1",
        "node-1-2",
        "node-1-3",
        "node-1-4",
        "node-1-6",
        "node-2-6",
        "node-2-7",
        "node-2-8",
    ]
    assert result.total_weight == pytest.approx(100 + 100 + 150 + 120 + 20 + math.sqrt(100**2 + 50**2) + 100)


def test_elevator_route_when_stairs_are_not_linked() -> None:
    """Without the stairs transition the route rides the elevator once."""
    payload = copy.deepcopy(SAMPLE_BUILDING_PAYLOAD)
    for floor in payload["floors"]:
        for node in floor["path_nodes"]:
            if node["id"] in {"node-1-6", "node-2-6", "node-3-6"}:
                node.pop("is_transition", None)
                node.pop("transition_to", None)
    building = building_from_payload(payload)

    result = find_route(building, KIOSK_LOCATION, building.find_location("meeting-2"))

    assert result.node_ids == [
        "node-1-1",
        "node-1-2",
        "node-1-3",
        "node-1-4",
        "node-2-4",
        "node-2-3",
        "node-2-5",
        "node-2-7",
        "node-2-8",
    ]
    distances = 100 + 100 + 150 + 50 + 150 + 70 + 100
    assert result.total_weight == pytest.approx(distances + 20)


def test_one_sided_transition_is_traversable_both_ways(building) -> None:
    """Floor 3 only declares its transitions downwards."""
    exec_suite = building.find_location("exec-suite")
    conference = building.find_location("meeting-2")

    down = find_route(building, exec_suite, conference)
    up = find_route(building, conference, exec_suite)

    assert down.found and up.found
    assert down.node_ids[0] == "node-3-1"
    assert down.node_ids[-1] == "node-2-8"
    assert up.node_ids == list(reversed(down.node_ids))
    assert up.total_weight == pytest.approx(down.total_weight)


def test_detour_preferred_over_transition_penalty(detour_building) -> None:
    result = find_route(
        detour_building,
        detour_building.find_location("loc-a"),
        detour_building.find_location("loc-b"),
    )

    assert result.node_ids == ["a", "m", "b"]
    assert result.total_weight == pytest.approx(2 * math.sqrt(50))


def test_transition_used_when_it_is_the_only_link(detour_payload) -> None:
    floor_one = detour_payload["floors"][0]
    floor_one["path_nodes"] = [n for n in floor_one["path_nodes"] if n["id"] != "m"]
    for node in floor_one["path_nodes"]:
        node["connections"] = []
    building = building_from_payload(detour_payload)

    result = find_route(building, building.find_location("loc-a"), building.find_location("loc-b"))

    assert result.node_ids == ["a", "a2", "b2", "b"]
    assert result.total_weight == pytest.approx(20 + 10 + 20)


def test_route_weight_is_optimal_against_brute_force(building) -> None:
    graph = build_route_graph(building)
    pairs = [("reception", "tech-lab"), ("meeting-1b", "office-2a"), ("boardroom", "exit-main")]

    for start_id, goal_id in pairs:
        start = building.find_location(start_id)
        goal = building.find_location(goal_id)
        result = find_route(building, start, goal, graph=graph)

        assert result.found
        assert route_weight(graph, result.node_ids) == pytest.approx(result.total_weight)
        brute = _all_simple_path_weights(graph, result.start_node_id, result.end_node_id)
        assert result.total_weight <= min(brute) + 1e-9


def test_disconnected_destination_is_unreachable() -> None:
    building = building_from_payload(
        {
            "name": "Split",
            "floors": [
                {"floor": 1, "name": "One", "path_nodes": [
                    {"id": "p", "position": {"x": 0, "y": 0}, "connections": ["q"]},
                    {"id": "q", "position": {"x": 5, "y": 0}},
                ]},
                {"floor": 2, "name": "Two", "path_nodes": [
                    {"id": "r", "position": {"x": 0, "y": 0}, "connections": ["s"]},
                    {"id": "s", "position": {"x": 5, "y": 0}},
                ]},
            ],
        }
    )

    result = find_route(building, _point(1, 0, 0), _point(2, 5, 0))

    assert result.status is RouteStatus.UNREACHABLE
    assert result.node_ids == []
    assert result.total_weight is None
    assert result.end_node_id == "s"


def test_floor_without_nodes_is_invalid_location(building) -> None:
    result = find_route(building, KIOSK_LOCATION, _point(7, 10, 10))

    assert result.status is RouteStatus.INVALID_LOCATION
    assert result.node_ids == []


def test_find_path_returns_plain_sequence(building) -> None:
    assert find_path(building, KIOSK_LOCATION, building.find_location("cafe")) == ["node-1-1", "node-1-2"]
    assert find_path(building, KIOSK_LOCATION, _point(7, 0, 0)) == []


def test_dijkstra_unknown_start_raises(building) -> None:
    with pytest.raises(ValueError, match="not in the route graph"):
        dijkstra(build_route_graph(building), "node-9-9")


def test_dijkstra_full_run_settles_reachable_nodes(building) -> None:
    distances, previous = dijkstra(build_route_graph(building), "node-1-1")

    assert distances["node-1-1"] == 0.0
    assert distances["node-3-7"] < float("inf")
    assert "node-1-1" not in previous


def test_reconstruct_path_edge_cases() -> None:
    previous = {"b": "a", "c": "b"}

    assert reconstruct_path(previous, "a", "c") == ["a", "b", "c"]
    assert reconstruct_path(previous, "a", "a") == ["a"]
    assert reconstruct_path(previous, "a", "z") == []
    assert reconstruct_path({"c": "x"}, "a", "c") == []


def test_route_weight_rejects_non_adjacent_nodes(building) -> None:
    with pytest.raises(ValueError, match="not adjacent"):
        route_weight(build_route_graph(building), ["node-1-1", "node-1-3"])
