"""Bundled demo building used when no building file is configured."""

from __future__ import annotations

from typing import Any

from wayfinder.building import BuildingData, Location, LocationType, Position, building_from_payload


def _loc(loc_id: str, name: str, loc_type: str, floor: int, x: float, y: float) -> dict[str, Any]:
    return {"id": loc_id, "name": name, "type": loc_type, "floor": floor, "position": {"x": x, "y": y}}


def _node(
    node_id: str,
    x: float,
    y: float,
    connections: list[str],
    transition_to: str | None = None,
) -> dict[str, Any]:
    node: dict[str, Any] = {"id": node_id, "position": {"x": x, "y": y}, "connections": connections}
    if transition_to:
        node["is_transition"] = True
        node["transition_to"] = transition_to
    return node


SAMPLE_BUILDING_PAYLOAD: dict[str, Any] = {
    "name": "Tech Innovation Center",
    "floors": [
        {
            "floor": 1,
            "name": "Ground Floor",
            "width": 800,
            "height": 600,
            "locations": [
                _loc("reception", "Reception", "office", 1, 50, 80),
                _loc("cafe", "Café", "room", 1, 150, 100),
                _loc("restroom-1f-m", "Men's Restroom", "restroom", 1, 250, 80),
                _loc("restroom-1f-w", "Women's Restroom", "restroom", 1, 250, 130),
                _loc("elevator-1", "Elevator", "elevator", 1, 400, 80),
                _loc("stairs-1", "Stairs", "stairs", 1, 400, 200),
                _loc("meeting-1a", "Meeting Room A", "meeting", 1, 500, 100),
                _loc("meeting-1b", "Meeting Room B", "meeting", 1, 500, 200),
                _loc("exit-main", "Main Exit", "exit", 1, 50, 250),
                _loc("accessible-1", "Accessible Restroom", "accessible", 1, 250, 180),
            ],
            "path_nodes": [
                _node("node-1-1", 50, 80, ["node-1-2"]),
                _node("node-1-2", 150, 80, ["node-1-1", "node-1-3"]),
                _node("node-1-3", 250, 80, ["node-1-2", "node-1-4"]),
                _node("node-1-4", 400, 80, ["node-1-3", "node-1-5", "node-1-6"], transition_to="node-2-4"),
                _node("node-1-5", 500, 100, ["node-1-4"]),
                _node("node-1-6", 400, 200, ["node-1-4", "node-1-7"], transition_to="node-2-6"),
                _node("node-1-7", 500, 200, ["node-1-6"]),
            ],
        },
        {
            "floor": 2,
            "name": "Second Floor",
            "width": 800,
            "height": 600,
            "locations": [
                _loc("office-2a", "Office Suite A", "office", 2, 100, 80),
                _loc("office-2b", "Office Suite B", "office", 2, 100, 200),
                _loc("restroom-2f-m", "Men's Restroom", "restroom", 2, 250, 80),
                _loc("restroom-2f-w", "Women's Restroom", "restroom", 2, 250, 130),
                _loc("elevator-2", "Elevator", "elevator", 2, 400, 80),
                _loc("stairs-2", "Stairs", "stairs", 2, 400, 200),
                _loc("meeting-2", "Conference Room", "meeting", 2, 600, 150),
            ],
            "path_nodes": [
                _node("node-2-1", 100, 80, ["node-2-2"]),
                _node("node-2-2", 250, 80, ["node-2-1", "node-2-3"]),
                _node("node-2-3", 350, 80, ["node-2-2", "node-2-4", "node-2-5"]),
                _node("node-2-4", 400, 80, ["node-2-3"], transition_to="node-1-4"),
                _node("node-2-5", 500, 80, ["node-2-3", "node-2-7"]),
                _node("node-2-6", 400, 200, ["node-2-7"], transition_to="node-1-6"),
                _node("node-2-7", 500, 150, ["node-2-5", "node-2-6", "node-2-8"]),
                _node("node-2-8", 600, 150, ["node-2-7"]),
            ],
        },
        {
            "floor": 3,
            "name": "Third Floor",
            "width": 800,
            "height": 600,
            "locations": [
                _loc("exec-suite", "Executive Suite", "office", 3, 100, 100),
                _loc("hr-office", "HR Department", "office", 3, 250, 100),
                _loc("restroom-3f-m", "Men's Restroom", "restroom", 3, 350, 80),
                _loc("restroom-3f-w", "Women's Restroom", "restroom", 3, 350, 130),
                _loc("elevator-3", "Elevator", "elevator", 3, 400, 80),
                _loc("stairs-3", "Stairs", "stairs", 3, 400, 200),
                _loc("boardroom", "Board Room", "meeting", 3, 550, 100),
                _loc("tech-lab", "Technology Lab", "room", 3, 600, 200),
            ],
            # Floor 3 transitions point down to floor 2 without a reciprocal
            # declaration; validation reports them as one-sided.
            "path_nodes": [
                _node("node-3-1", 100, 100, ["node-3-2"]),
                _node("node-3-2", 250, 100, ["node-3-1", "node-3-3"]),
                _node("node-3-3", 350, 100, ["node-3-2", "node-3-4"]),
                _node("node-3-4", 400, 80, ["node-3-3", "node-3-5", "node-3-6"], transition_to="node-2-4"),
                _node("node-3-5", 550, 100, ["node-3-4"]),
                _node("node-3-6", 400, 200, ["node-3-4", "node-3-7"], transition_to="node-2-6"),
                _node("node-3-7", 600, 200, ["node-3-6"]),
            ],
        },
    ],
}

# Information kiosk at the main entrance; default route origin.
KIOSK_LOCATION = Location(
    id="kiosk",
    name="You Are Here",
    type=LocationType.KIOSK,
    floor=1,
    position=Position(x=50, y=80),
)


def sample_building() -> BuildingData:
    """Return the bundled demo building."""
    return building_from_payload(SAMPLE_BUILDING_PAYLOAD)
