"""Location lookup and search grouped by floor."""

from __future__ import annotations

from wayfinder.building import BuildingData, Location


def search_locations(building: BuildingData, term: str = "", floor_number: int | None = None) -> list[Location]:
    """Case-insensitive substring match on location name or type.

    An empty term matches every location.
    """
    needle = term.strip().lower()
    matches: list[Location] = []
    for location in building.iter_locations():
        if floor_number is not None and location.floor != floor_number:
            continue
        if not needle or needle in location.name.lower() or needle in location.type.value:
            matches.append(location)
    return matches


def group_by_floor(locations: list[Location]) -> dict[int, list[Location]]:
    """Group locations by floor number, floors ascending."""
    grouped: dict[int, list[Location]] = {}
    for location in locations:
        grouped.setdefault(location.floor, []).append(location)
    return dict(sorted(grouped.items()))


def floor_display_name(building: BuildingData, floor_number: int) -> str:
    floor = building.get_floor(floor_number)
    return floor.name if floor is not None else f"Floor {floor_number}"
