"""Per-floor projections of a route for map rendering.

A route spans floors; a map shows one floor at a time. These helpers filter a
route down to one floor, pair consecutive surviving ids into drawable
segments, and list transition nodes that imply cross-floor continuity.
"""

from __future__ import annotations

from typing import Any, Sequence

from wayfinder.building import BuildingData


def route_nodes_on_floor(building: BuildingData, route: Sequence[str], floor_number: int) -> list[str]:
    """Route ids belonging to ``floor_number``, in route order."""
    floor = building.get_floor(floor_number)
    if floor is None:
        return []
    on_floor = {node.id for node in floor.path_nodes}
    return [node_id for node_id in route if node_id in on_floor]


def route_segments_on_floor(
    building: BuildingData,
    route: Sequence[str],
    floor_number: int,
) -> list[tuple[str, str]]:
    """Consecutive pairs of the floor-filtered route."""
    ids = route_nodes_on_floor(building, route, floor_number)
    return list(zip(ids, ids[1:]))


def transition_markers_on_floor(building: BuildingData, route: Sequence[str], floor_number: int) -> list[str]:
    """Transition nodes on the floor that appear anywhere in the route."""
    floor = building.get_floor(floor_number)
    if floor is None:
        return []
    in_route = set(route)
    return [node.id for node in floor.path_nodes if node.is_transition and node.id in in_route]


def route_floors(building: BuildingData, route: Sequence[str]) -> list[int]:
    """Floors visited by the route, in order, without consecutive repeats.

    A node belongs to the floor plan that lists it, whatever its own ``floor``
    field says, so every floor reported here has ids in
    :func:`route_nodes_on_floor`.
    """
    plan_of = {node.id: floor.floor for floor in building.floors for node in floor.path_nodes}
    floors: list[int] = []
    for node_id in route:
        floor_number = plan_of.get(node_id)
        if floor_number is None:
            continue
        if not floors or floors[-1] != floor_number:
            floors.append(floor_number)
    return floors


def route_polyline(building: BuildingData, route: Sequence[str], floor_number: int) -> list[dict[str, float]]:
    """Floor-local coordinates of the floor-filtered route."""
    nodes = building.node_index()
    return [
        {"x": float(nodes[node_id].position.x), "y": float(nodes[node_id].position.y)}
        for node_id in route_nodes_on_floor(building, route, floor_number)
    ]


def floor_route_payload(building: BuildingData, route: Sequence[str]) -> list[dict[str, Any]]:
    """Per-floor drawing payload for every floor touched by the route."""
    payload: list[dict[str, Any]] = []
    for floor_number in sorted(set(route_floors(building, route))):
        payload.append(
            {
                "floor": floor_number,
                "node_ids": route_nodes_on_floor(building, route, floor_number),
                "segments": [list(pair) for pair in route_segments_on_floor(building, route, floor_number)],
                "transition_markers": transition_markers_on_floor(building, route, floor_number),
                "polyline": route_polyline(building, route, floor_number),
            }
        )
    return payload
