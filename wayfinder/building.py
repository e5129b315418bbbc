"""Static building model consumed by the routing engine.

Purpose:
- Describe floors, named locations and per-floor routing graphs.
- Parse JSON-compatible payloads into immutable value types.

Usage example:
    >>> from wayfinder.building import building_from_payload
    >>> building = building_from_payload({"name": "HQ", "floors": []})
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator


class BuildingDataError(ValueError):
    """Raised when a building payload cannot be parsed."""


class LocationType(str, Enum):
    """Kinds of named points of interest."""

    ROOM = "room"
    OFFICE = "office"
    MEETING = "meeting"
    RESTROOM = "restroom"
    ELEVATOR = "elevator"
    STAIRS = "stairs"
    EXIT = "exit"
    KIOSK = "kiosk"
    ACCESSIBLE = "accessible"


@dataclass(frozen=True, slots=True)
class Position:
    """Floor-local coordinate in floor-plan units."""

    x: float
    y: float
    z: float | None = None


@dataclass(frozen=True, slots=True)
class Location:
    """Named, typed destination on a floor."""

    id: str
    name: str
    type: LocationType
    floor: int
    position: Position
    description: str | None = None


@dataclass(frozen=True, slots=True)
class PathNode:
    """Navigable waypoint of the routing graph."""

    id: str
    position: Position
    floor: int
    connections: tuple[str, ...] = ()
    is_transition: bool = False
    transition_to: str | None = None


@dataclass(frozen=True, slots=True)
class FloorPlan:
    """One floor's locations and path nodes."""

    floor: int
    name: str
    width: float
    height: float
    locations: tuple[Location, ...] = ()
    path_nodes: tuple[PathNode, ...] = ()
    background_image: str | None = None


@dataclass(frozen=True, slots=True)
class BuildingData:
    """Root input of the routing engine."""

    name: str
    floors: tuple[FloorPlan, ...] = field(default_factory=tuple)

    def get_floor(self, floor_number: int) -> FloorPlan | None:
        """Return the first floor plan with the given number, if any."""
        for floor in self.floors:
            if floor.floor == floor_number:
                return floor
        return None

    def iter_path_nodes(self) -> Iterator[PathNode]:
        """Yield path nodes of all floors in floor then insertion order."""
        for floor in self.floors:
            yield from floor.path_nodes

    def iter_locations(self) -> Iterator[Location]:
        for floor in self.floors:
            yield from floor.locations

    def find_location(self, location_id: str) -> Location | None:
        for location in self.iter_locations():
            if location.id == location_id:
                return location
        return None

    def node_index(self) -> dict[str, PathNode]:
        """Map node id -> PathNode across all floors."""
        return {node.id: node for node in self.iter_path_nodes()}


def _as_number(value: Any, cast: type, label: str) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        kind = "an integer" if cast is int else "a number"
        raise BuildingDataError(f"{label} must be {kind}, got {value!r}") from exc


def _as_list(value: Any, label: str) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise BuildingDataError(f"{label} must be a list")
    return list(value)


def _optional_floor(raw: dict[str, Any], floor_number: int, label: str) -> int:
    if raw.get("floor") is None:
        return floor_number
    return _as_number(raw["floor"], int, f"{label}.floor")


def _parse_position(raw: Any, label: str) -> Position:
    if not isinstance(raw, dict):
        raise BuildingDataError(f"{label}.position must be an object")
    try:
        x = float(raw["x"])
        y = float(raw["y"])
    except (KeyError, TypeError, ValueError) as exc:
        raise BuildingDataError(f"{label}.position must include numeric x and y") from exc

    z = raw.get("z")
    if z is not None:
        z = _as_number(z, float, f"{label}.position.z")
    return Position(x=x, y=y, z=z)


def _parse_location(raw: Any, floor_number: int, label: str) -> Location:
    if not isinstance(raw, dict):
        raise BuildingDataError(f"{label} must be an object")

    required = {"id", "name", "type", "position"}
    if not required.issubset(raw.keys()):
        raise BuildingDataError(f"{label} must include id, name, type, position")

    try:
        location_type = LocationType(str(raw["type"]).lower())
    except ValueError as exc:
        raise BuildingDataError(f"{label}.type '{raw['type']}' is not a known location type") from exc

    return Location(
        id=str(raw["id"]),
        name=str(raw["name"]),
        type=location_type,
        floor=_optional_floor(raw, floor_number, label),
        position=_parse_position(raw["position"], label),
        description=raw.get("description"),
    )


def _parse_path_node(raw: Any, floor_number: int, label: str) -> PathNode:
    if not isinstance(raw, dict):
        raise BuildingDataError(f"{label} must be an object")
    if "id" not in raw or "position" not in raw:
        raise BuildingDataError(f"{label} must include id and position")

    connections = raw.get("connections", [])
    if not isinstance(connections, (list, tuple)):
        raise BuildingDataError(f"{label}.connections must be a list of node ids")

    # Accept both camelCase (front-end data files) and snake_case keys.
    is_transition = bool(raw.get("is_transition", raw.get("isTransition", False)))
    transition_to = raw.get("transition_to", raw.get("transitionTo"))

    return PathNode(
        id=str(raw["id"]),
        position=_parse_position(raw["position"], label),
        floor=_optional_floor(raw, floor_number, label),
        connections=tuple(str(c) for c in connections),
        is_transition=is_transition,
        transition_to=str(transition_to) if transition_to is not None else None,
    )


def building_from_payload(payload: dict[str, Any]) -> BuildingData:
    """Build an immutable BuildingData from a JSON-compatible mapping.

    Args:
        payload: Mapping with ``name`` and a ``floors`` list. Path node keys may
            be given in snake_case or camelCase.

    Returns:
        Parsed BuildingData.

    Raises:
        BuildingDataError: If required fields are missing or malformed.
    """
    if not isinstance(payload, dict):
        raise BuildingDataError("Building payload must be an object")

    floors_raw = payload.get("floors", [])
    if not isinstance(floors_raw, list):
        raise BuildingDataError("floors must be a list")

    floors: list[FloorPlan] = []
    for idx, floor_raw in enumerate(floors_raw):
        if not isinstance(floor_raw, dict) or "floor" not in floor_raw:
            raise BuildingDataError(f"floors[{idx}] must be an object with a floor number")

        floor_number = _as_number(floor_raw["floor"], int, f"floors[{idx}].floor")
        locations_raw = _as_list(floor_raw.get("locations", []), f"floors[{idx}].locations")
        locations = tuple(
            _parse_location(item, floor_number, f"floors[{idx}].locations[{i}]")
            for i, item in enumerate(locations_raw)
        )
        nodes_raw = _as_list(
            floor_raw.get("path_nodes", floor_raw.get("pathNodes", [])), f"floors[{idx}].path_nodes"
        )
        path_nodes = tuple(
            _parse_path_node(item, floor_number, f"floors[{idx}].path_nodes[{i}]")
            for i, item in enumerate(nodes_raw)
        )

        floors.append(
            FloorPlan(
                floor=floor_number,
                name=str(floor_raw.get("name", f"Floor {floor_number}")),
                width=_as_number(floor_raw.get("width", 800), float, f"floors[{idx}].width"),
                height=_as_number(floor_raw.get("height", 600), float, f"floors[{idx}].height"),
                locations=locations,
                path_nodes=path_nodes,
                background_image=floor_raw.get("background_image", floor_raw.get("backgroundImage")),
            )
        )

    return BuildingData(name=str(payload.get("name", "building")), floors=tuple(floors))


def load_building_json(path: str | Path) -> BuildingData:
    """Load a building description from a JSON file."""
    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise BuildingDataError(f"Building file not found: {file_path}") from exc
    except json.JSONDecodeError as exc:
        raise BuildingDataError(f"Building file is not valid JSON: {file_path}") from exc
    return building_from_payload(payload)


def _position_payload(position: Position) -> dict[str, float]:
    out = {"x": position.x, "y": position.y}
    if position.z is not None:
        out["z"] = position.z
    return out


def location_to_payload(location: Location) -> dict[str, Any]:
    """Serialize a Location to a JSON-safe dictionary."""
    payload: dict[str, Any] = {
        "id": location.id,
        "name": location.name,
        "type": location.type.value,
        "floor": location.floor,
        "position": _position_payload(location.position),
    }
    if location.description is not None:
        payload["description"] = location.description
    return payload


def path_node_to_payload(node: PathNode) -> dict[str, Any]:
    """Serialize a PathNode to a JSON-safe dictionary."""
    payload: dict[str, Any] = {
        "id": node.id,
        "position": _position_payload(node.position),
        "floor": node.floor,
        "connections": list(node.connections),
    }
    if node.is_transition:
        payload["is_transition"] = True
    if node.transition_to is not None:
        payload["transition_to"] = node.transition_to
    return payload


def building_to_payload(building: BuildingData) -> dict[str, Any]:
    """Serialize BuildingData; inverse of :func:`building_from_payload`."""
    floors = []
    for floor in building.floors:
        item: dict[str, Any] = {
            "floor": floor.floor,
            "name": floor.name,
            "width": floor.width,
            "height": floor.height,
            "locations": [location_to_payload(loc) for loc in floor.locations],
            "path_nodes": [path_node_to_payload(node) for node in floor.path_nodes],
        }
        if floor.background_image is not None:
            item["background_image"] = floor.background_image
        floors.append(item)
    return {"name": building.name, "floors": floors}
