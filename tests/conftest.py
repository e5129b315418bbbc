"""Pytest global fixtures and test isolation hooks."""

from __future__ import annotations

import pytest

from wayfinder.api import STATE
from wayfinder.building import BuildingData, building_from_payload
from wayfinder.config import Settings
from wayfinder.graph_cache import RouteGraphCache
from wayfinder.sample_data import sample_building


@pytest.fixture(autouse=True)
def reset_app_state() -> None:
    """Reset in-memory API state before each test."""
    STATE.building = None
    STATE.building_fingerprint = None
    STATE.settings = Settings()
    STATE.graph_cache = RouteGraphCache()


@pytest.fixture()
def building() -> BuildingData:
    """Bundled three-floor demo building."""
    return sample_building()


@pytest.fixture()
def detour_payload() -> dict:
    """Two floors; a and b are linked on floor 1 by a short detour via m,
    and on floor 2 by a corridor reached through two transitions."""
    return {
        "name": "Detour",
        "floors": [
            {
                "floor": 1,
                "name": "One",
                "locations": [
                    {"id": "loc-a", "name": "A", "type": "room", "floor": 1, "position": {"x": 0, "y": 0}},
                    {"id": "loc-b", "name": "B", "type": "room", "floor": 1, "position": {"x": 10, "y": 0}},
                ],
                "path_nodes": [
                    {"id": "a", "position": {"x": 0, "y": 0}, "connections": ["m"],
                     "is_transition": True, "transition_to": "a2"},
                    {"id": "m", "position": {"x": 5, "y": 5}, "connections": ["a", "b"]},
                    {"id": "b", "position": {"x": 10, "y": 0}, "connections": ["m"],
                     "is_transition": True, "transition_to": "b2"},
                ],
            },
            {
                "floor": 2,
                "name": "Two",
                "locations": [],
                "path_nodes": [
                    {"id": "a2", "position": {"x": 0, "y": 0}, "connections": ["b2"],
                     "is_transition": True, "transition_to": "a"},
                    {"id": "b2", "position": {"x": 10, "y": 0}, "connections": [],
                     "is_transition": True, "transition_to": "b"},
                ],
            },
        ],
    }


@pytest.fixture()
def detour_building(detour_payload: dict) -> BuildingData:
    return building_from_payload(detour_payload)
