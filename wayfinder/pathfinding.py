"""Dijkstra routing between building locations.

Purpose:
- Snap locations to their nearest path node on the same floor.
- Compute shortest routes over the weighted route graph, across floors.

Usage example:
    >>> from wayfinder.pathfinding import find_route
    >>> from wayfinder.sample_data import KIOSK_LOCATION, sample_building
    >>> building = sample_building()
    >>> find_route(building, KIOSK_LOCATION, building.find_location("meeting-2")).node_ids
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import numpy as np

from wayfinder.building import BuildingData, Location
from wayfinder.route_graph import DEFAULT_TRANSITION_PENALTY, RouteGraph, build_route_graph

logger = logging.getLogger(__name__)


class RouteStatus(str, Enum):
    """Outcome of a route request."""

    FOUND = "found"
    UNREACHABLE = "unreachable"
    INVALID_LOCATION = "invalid_location"


@dataclass(slots=True)
class RouteResult:
    """Structured route result payload."""

    status: RouteStatus
    node_ids: list[str] = field(default_factory=list)
    total_weight: float | None = None
    start_node_id: str | None = None
    end_node_id: str | None = None

    @property
    def found(self) -> bool:
        return self.status is RouteStatus.FOUND


def nearest_path_node(building: BuildingData, location: Location) -> str | None:
    """Return the id of the path node closest to ``location`` on its floor.

    Ties go to the first node in the floor's insertion order. Returns None when
    the floor is unknown or has no path nodes.
    """
    floor = building.get_floor(location.floor)
    if floor is None or not floor.path_nodes:
        return None

    coords = np.array([(node.position.x, node.position.y) for node in floor.path_nodes], dtype=np.float64)
    dists = np.hypot(coords[:, 0] - location.position.x, coords[:, 1] - location.position.y)
    return floor.path_nodes[int(np.argmin(dists))].id


def dijkstra(
    graph: RouteGraph,
    start: str,
    goal: str | None = None,
) -> tuple[dict[str, float], dict[str, str]]:
    """Single-source shortest paths from ``start``.

    The search stops as soon as ``goal`` is settled, or when no unsettled node
    has a finite distance. Settled nodes are never reopened.

    Args:
        graph: Route graph with non-negative weights.
        start: Source node id.
        goal: Optional target node id for early termination.

    Returns:
        Tuple of:
            - tentative distance per node id (``inf`` when never reached)
            - predecessor per reached node id (start has none)

    Raises:
        ValueError: If ``start`` is not a node of ``graph``.
    """
    if start not in graph:
        raise ValueError(f"Start node '{start}' is not in the route graph")

    distances: dict[str, float] = {node_id: float("inf") for node_id in graph.adjacency}
    distances[start] = 0.0
    previous: dict[str, str] = {}
    settled: set[str] = set()

    open_heap: list[tuple[float, str]] = [(0.0, start)]

    while open_heap:
        dist, current = heapq.heappop(open_heap)

        if current in settled:
            continue
        if current == goal:
            break

        settled.add(current)

        for neighbor, weight in graph.neighbors(current).items():
            if neighbor in settled:
                continue

            tentative = dist + weight
            if tentative < distances.get(neighbor, float("inf")):
                distances[neighbor] = tentative
                previous[neighbor] = current
                heapq.heappush(open_heap, (tentative, neighbor))

    return distances, previous


def reconstruct_path(previous: dict[str, str], start: str, goal: str) -> list[str]:
    """Walk predecessor links back from ``goal``.

    Returns ``[start]`` when both ends coincide and an empty list when the walk
    does not arrive at ``start`` (goal unreachable).
    """
    if goal == start:
        return [start]

    path = [goal]
    current = goal
    while current in previous:
        current = previous[current]
        path.append(current)
    path.reverse()

    if path[0] != start:
        return []
    return path


def route_weight(graph: RouteGraph, node_ids: Sequence[str]) -> float:
    """Sum consecutive edge weights along a route.

    Raises:
        ValueError: If two consecutive ids are not adjacent in ``graph``.
    """
    total = 0.0
    for a, b in zip(node_ids, node_ids[1:]):
        weight = graph.edge_weight(a, b)
        if weight is None:
            raise ValueError(f"Nodes '{a}' and '{b}' are not adjacent")
        total += weight
    return total


def find_route(
    building: BuildingData,
    start: Location,
    end: Location,
    transition_penalty: float = DEFAULT_TRANSITION_PENALTY,
    graph: RouteGraph | None = None,
) -> RouteResult:
    """Compute the shortest route between two locations.

    Args:
        building: Building snapshot; not mutated.
        start: Origin location.
        end: Destination location.
        transition_penalty: Floor-change weight used when building the graph.
        graph: Prebuilt graph for ``building``; built fresh when omitted.

    Returns:
        RouteResult. ``node_ids`` is empty unless the status is ``found``.
    """
    start_node = nearest_path_node(building, start)
    end_node = nearest_path_node(building, end)

    if start_node is None or end_node is None:
        logger.debug("No path node on floor for %s -> %s", start.id, end.id)
        return RouteResult(status=RouteStatus.INVALID_LOCATION, start_node_id=start_node, end_node_id=end_node)

    if start_node == end_node:
        return RouteResult(
            status=RouteStatus.FOUND,
            node_ids=[start_node],
            total_weight=0.0,
            start_node_id=start_node,
            end_node_id=end_node,
        )

    if graph is None:
        graph = build_route_graph(building, transition_penalty=transition_penalty)

    distances, previous = dijkstra(graph, start_node, end_node)
    path = reconstruct_path(previous, start_node, end_node)

    if not path:
        logger.debug("No route from %s to %s", start_node, end_node)
        return RouteResult(status=RouteStatus.UNREACHABLE, start_node_id=start_node, end_node_id=end_node)

    return RouteResult(
        status=RouteStatus.FOUND,
        node_ids=path,
        total_weight=float(distances[end_node]),
        start_node_id=start_node,
        end_node_id=end_node,
    )


def find_path(building: BuildingData, start: Location, end: Location) -> list[str]:
    """Return only the node id sequence of :func:`find_route` (empty if no route)."""
    return find_route(building, start, end).node_ids
