"""Weighted routing graph built from per-floor path nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from wayfinder.building import BuildingData
from wayfinder.utils import euclidean_distance

logger = logging.getLogger(__name__)

# Cost of riding an elevator / taking stairs, independent of floor separation.
DEFAULT_TRANSITION_PENALTY = 20.0


@dataclass(frozen=True, slots=True)
class DanglingReference:
    """Edge declaration whose target id does not exist."""

    node_id: str
    missing_id: str
    kind: str  # "connection" | "transition"


@dataclass(frozen=True, slots=True)
class RouteGraph:
    """Undirected weighted adjacency over all path node ids."""

    adjacency: Mapping[str, Mapping[str, float]]
    transition_penalty: float
    dangling: tuple[DanglingReference, ...] = ()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def neighbors(self, node_id: str) -> Mapping[str, float]:
        return self.adjacency.get(node_id, MappingProxyType({}))

    def edge_weight(self, a: str, b: str) -> float | None:
        return self.adjacency.get(a, {}).get(b)

    @property
    def edge_count(self) -> int:
        return sum(len(nbrs) for nbrs in self.adjacency.values()) // 2


def build_route_graph(
    building: BuildingData,
    transition_penalty: float = DEFAULT_TRANSITION_PENALTY,
) -> RouteGraph:
    """Build the routing graph for a building.

    Same-floor connections are weighted by Euclidean distance and added in both
    directions, whichever endpoint declared them. Transition nodes get a
    bidirectional edge of ``transition_penalty`` to their ``transition_to``
    counterpart, overriding any distance edge between the same pair.
    References to unknown node ids are skipped and recorded in
    ``RouteGraph.dangling``.

    Args:
        building: Building to index.
        transition_penalty: Fixed weight for floor-changing edges.

    Returns:
        Immutable RouteGraph.

    Raises:
        ValueError: If ``transition_penalty`` is negative.
    """
    if transition_penalty < 0:
        raise ValueError("transition_penalty must be >= 0")

    nodes = building.node_index()
    adjacency: dict[str, dict[str, float]] = {node_id: {} for node_id in nodes}
    dangling: list[DanglingReference] = []

    def add_edge(a: str, b: str, weight: float) -> None:
        if a == b:
            return
        adjacency[a][b] = weight
        adjacency[b][a] = weight

    for node in nodes.values():
        for neighbor_id in node.connections:
            neighbor = nodes.get(neighbor_id)
            if neighbor is None:
                dangling.append(DanglingReference(node.id, neighbor_id, "connection"))
                continue
            add_edge(node.id, neighbor_id, euclidean_distance(node.position, neighbor.position))

    # Second pass so floor-change costs are not overwritten by a later distance edge.
    for node in nodes.values():
        if not node.is_transition or not node.transition_to:
            continue
        if node.transition_to not in nodes:
            dangling.append(DanglingReference(node.id, node.transition_to, "transition"))
            continue
        add_edge(node.id, node.transition_to, float(transition_penalty))

    for ref in dangling:
        logger.warning("Skipping %s edge %s -> %s: target node does not exist", ref.kind, ref.node_id, ref.missing_id)

    frozen = {node_id: MappingProxyType(nbrs) for node_id, nbrs in adjacency.items()}
    return RouteGraph(
        adjacency=MappingProxyType(frozen),
        transition_penalty=float(transition_penalty),
        dangling=tuple(dangling),
    )
