"""FastAPI routes for building data, location search and indoor routing.

Endpoints:
- Building data (`/building`, `/floors`, `/locations`, `/validation`)
- Routing (`/route`)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, model_validator

from wayfinder.building import (
    BuildingData,
    Location,
    LocationType,
    Position,
    building_from_payload,
    building_to_payload,
    load_building_json,
    location_to_payload,
)
from wayfinder.config import Settings
from wayfinder.directory import floor_display_name, group_by_floor, search_locations
from wayfinder.floor_view import floor_route_payload, route_floors
from wayfinder.graph_cache import RouteGraphCache, building_fingerprint
from wayfinder.graph_validation import validate_building
from wayfinder.pathfinding import find_route
from wayfinder.route_graph import RouteGraph, build_route_graph
from wayfinder.sample_data import KIOSK_LOCATION, sample_building

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """In-memory building and routing state."""

    building: BuildingData | None = None
    settings: Settings = field(default_factory=Settings)
    building_fingerprint: str | None = None
    graph_cache: RouteGraphCache = field(default_factory=RouteGraphCache)

    def install(self, building: BuildingData) -> None:
        """Make ``building`` current and fingerprint it once for the graph cache."""
        self.building = building
        self.building_fingerprint = building_fingerprint(building)
        self.graph_cache.clear()


STATE = AppState()


class PositionModel(BaseModel):
    """Floor-local coordinate."""

    x: float
    y: float
    z: float | None = None


class LocationModel(BaseModel):
    """Named point of interest."""

    id: str = Field(..., min_length=1)
    name: str
    type: LocationType
    floor: int
    position: PositionModel
    description: str | None = None


class PathNodeModel(BaseModel):
    """Routing graph vertex; accepts camelCase keys from front-end data files."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    position: PositionModel
    floor: int | None = None
    connections: list[str] = Field(default_factory=list)
    is_transition: bool = Field(default=False, alias="isTransition")
    transition_to: str | None = Field(default=None, alias="transitionTo")


class FloorPlanModel(BaseModel):
    """One floor of the building payload."""

    model_config = ConfigDict(populate_by_name=True)

    floor: int
    name: str
    width: float = Field(default=800, gt=0)
    height: float = Field(default=600, gt=0)
    background_image: str | None = Field(default=None, alias="backgroundImage")
    locations: list[LocationModel] = Field(default_factory=list)
    path_nodes: list[PathNodeModel] = Field(default_factory=list, alias="pathNodes")


class BuildingModel(BaseModel):
    """Request payload for replacing the building."""

    name: str
    floors: list[FloorPlanModel]

    @model_validator(mode="after")
    def validate_floor_numbers(self) -> "BuildingModel":
        """Floor numbers must be unique."""
        numbers = [floor.floor for floor in self.floors]
        if len(set(numbers)) != len(numbers):
            raise ValueError("floor numbers must be unique")
        return self


class RouteRequest(BaseModel):
    """Request payload for a route computation.

    The start is either a known location id, an explicit location, or the
    entrance kiosk when neither is given.
    """

    goal_location_id: str = Field(..., min_length=1)
    start_location_id: str | None = None
    start: LocationModel | None = None

    @model_validator(mode="after")
    def validate_start(self) -> "RouteRequest":
        """Reject ambiguous start definitions."""
        if self.start_location_id and self.start is not None:
            raise ValueError("Provide either start_location_id or start, not both")
        return self


class FloorRoute(BaseModel):
    """Route projection for one floor."""

    floor: int
    node_ids: list[str]
    segments: list[list[str]]
    transition_markers: list[str]
    polyline: list[dict[str, float]]


class RouteResponse(BaseModel):
    """Response payload for routing requests."""

    status: str
    node_ids: list[str]
    total_weight: float | None = None
    start_node_id: str | None = None
    end_node_id: str | None = None
    floors: list[int] = Field(default_factory=list)
    floor_routes: list[FloorRoute] = Field(default_factory=list)


def _location_from_model(model: LocationModel) -> Location:
    pos = model.position
    return Location(
        id=model.id,
        name=model.name,
        type=model.type,
        floor=model.floor,
        position=Position(x=pos.x, y=pos.y, z=pos.z),
        description=model.description,
    )


def load_configured_building(settings: Settings) -> BuildingData:
    """Load the configured building file, or the bundled demo building."""
    if settings.building_path:
        building = load_building_json(settings.building_path)
        logger.info("Loaded building '%s' from %s", building.name, settings.building_path)
    else:
        building = sample_building()
        logger.info("Loaded bundled demo building '%s'", building.name)
    return building


def _current_building_or_400() -> BuildingData:
    """Get current building or raise 400."""
    if STATE.building is None:
        raise HTTPException(status_code=400, detail="No building loaded")
    return STATE.building


def _route_graph(building: BuildingData) -> RouteGraph:
    penalty = STATE.settings.transition_penalty
    if STATE.settings.graph_cache:
        return STATE.graph_cache.get(
            building, transition_penalty=penalty, fingerprint=STATE.building_fingerprint
        )
    return build_route_graph(building, transition_penalty=penalty)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is not None:
        STATE.settings = settings
    if STATE.building is None:
        STATE.install(load_configured_building(STATE.settings))

    app = FastAPI(title="Wayfinder API", version="1.0.0")

    raw_origins = STATE.settings.cors_origins
    if raw_origins == "*":
        cors_origins = ["*"]
        allow_credentials = False
    else:
        cors_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health endpoint with loaded building metadata."""
        return {
            "status": "ok",
            "version": app.version,
            "building": STATE.building.name if STATE.building is not None else None,
            "transition_penalty": STATE.settings.transition_penalty,
        }

    @app.get("/building")
    async def get_building() -> dict[str, Any]:
        """Return the full building payload."""
        return building_to_payload(_current_building_or_400())

    @app.put("/building")
    async def put_building(payload: BuildingModel) -> dict[str, Any]:
        """Replace the in-memory building and report data issues."""
        try:
            building = building_from_payload(payload.model_dump(mode="json"))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Building parsing failed: {exc}") from exc

        report = validate_building(building)
        STATE.install(building)
        logger.info(
            "Building replaced with '%s' (%d errors, %d warnings)",
            building.name,
            report["summary"]["errors"],
            report["summary"]["warnings"],
        )

        return {
            "message": "Building loaded successfully",
            "building_name": building.name,
            "floor_count": len(building.floors),
            "validation_report": report,
        }

    @app.get("/floors")
    async def get_floors() -> dict[str, Any]:
        """Return floor summaries of the current building."""
        building = _current_building_or_400()
        return {
            "building_name": building.name,
            "floors": [
                {
                    "floor": floor.floor,
                    "name": floor.name,
                    "width": floor.width,
                    "height": floor.height,
                    "location_count": len(floor.locations),
                    "path_node_count": len(floor.path_nodes),
                }
                for floor in building.floors
            ],
        }

    @app.get("/locations")
    async def get_locations(
        q: str = Query(default="", description="Case-insensitive match on name or type"),
        floor_number: int | None = Query(default=None),
    ) -> dict[str, Any]:
        """Search locations, grouped by floor."""
        building = _current_building_or_400()
        matches = search_locations(building, q, floor_number=floor_number)
        return {
            "building_name": building.name,
            "count": len(matches),
            "floors": [
                {
                    "floor": number,
                    "name": floor_display_name(building, number),
                    "locations": [location_to_payload(loc) for loc in locations],
                }
                for number, locations in group_by_floor(matches).items()
            ],
        }

    @app.get("/locations/{location_id}")
    async def get_location(location_id: str) -> dict[str, Any]:
        """Return one location by id."""
        building = _current_building_or_400()
        location = building.find_location(location_id)
        if location is None:
            raise HTTPException(status_code=404, detail=f"Location '{location_id}' was not found")
        return location_to_payload(location)

    @app.get("/validation")
    async def get_validation() -> dict[str, Any]:
        """Return the routing graph validation report."""
        return validate_building(_current_building_or_400())

    @app.post("/route", response_model=RouteResponse)
    async def post_route(payload: RouteRequest) -> RouteResponse:
        """Compute the shortest route from a start to a goal location."""
        building = _current_building_or_400()

        def resolve_location(location_id: str, label: str) -> Location:
            location = building.find_location(location_id)
            if location is None:
                raise HTTPException(status_code=404, detail=f"{label}_location_id '{location_id}' was not found")
            return location

        try:
            goal = resolve_location(payload.goal_location_id, "goal")
            if payload.start_location_id:
                start = resolve_location(payload.start_location_id, "start")
            elif payload.start is not None:
                start = _location_from_model(payload.start)
            else:
                start = KIOSK_LOCATION

            result = find_route(
                building,
                start,
                goal,
                transition_penalty=STATE.settings.transition_penalty,
                graph=_route_graph(building),
            )
        except HTTPException:
            raise
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid route query: {exc}") from exc
        except Exception as exc:  # pragma: no cover - safety net
            raise HTTPException(status_code=500, detail=f"Unexpected routing error: {exc}") from exc

        return RouteResponse(
            status=result.status.value,
            node_ids=result.node_ids,
            total_weight=result.total_weight,
            start_node_id=result.start_node_id,
            end_node_id=result.end_node_id,
            floors=route_floors(building, result.node_ids),
            floor_routes=[FloorRoute(**item) for item in floor_route_payload(building, result.node_ids)],
        )

    return app
