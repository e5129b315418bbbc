"""Route graph cache keyed by a content fingerprint of the building."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from wayfinder.building import BuildingData, building_to_payload
from wayfinder.route_graph import DEFAULT_TRANSITION_PENALTY, RouteGraph, build_route_graph
from wayfinder.utils import fingerprint_payload

logger = logging.getLogger(__name__)


def building_fingerprint(building: BuildingData) -> str:
    """Stable sha256 fingerprint of building content."""
    return fingerprint_payload(building_to_payload(building))


class RouteGraphCache:
    """Small LRU of built route graphs.

    Cached graphs are read-only, so one graph may be shared by concurrent
    searches; solver state is always per call.
    """

    def __init__(self, maxsize: int = 4) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be > 0")
        self.maxsize = int(maxsize)
        self._entries: OrderedDict[tuple[str, float], RouteGraph] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self,
        building: BuildingData,
        transition_penalty: float = DEFAULT_TRANSITION_PENALTY,
        fingerprint: str | None = None,
    ) -> RouteGraph:
        """Return the cached graph for ``building``, building it on a miss.

        Pass ``fingerprint`` when the caller already holds the building's
        fingerprint; hashing the full payload costs more than a graph build.
        """
        if fingerprint is None:
            fingerprint = building_fingerprint(building)
        key = (fingerprint, float(transition_penalty))

        with self._lock:
            graph = self._entries.get(key)
            if graph is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return graph

        graph = build_route_graph(building, transition_penalty=transition_penalty)

        with self._lock:
            self.misses += 1
            self._entries[key] = graph
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted route graph %s", evicted[0][:12])
        return graph

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
