"""Unit tests for location search."""

from __future__ import annotations

from wayfinder.directory import floor_display_name, group_by_floor, search_locations


def test_search_matches_name_or_type_case_insensitively(building) -> None:
    restrooms = search_locations(building, "RESTROOM")
    assert len(restrooms) == 7
    assert "accessible-1" in {loc.id for loc in restrooms}

    meetings = search_locations(building, "meeting")
    assert {loc.id for loc in meetings} == {"meeting-1a", "meeting-1b", "meeting-2", "boardroom"}


def test_empty_term_returns_everything_and_floor_filter_applies(building) -> None:
    assert len(search_locations(building)) == 25
    assert {loc.floor for loc in search_locations(building, "", floor_number=2)} == {2}


def test_group_by_floor_sorts_floors(building) -> None:
    grouped = group_by_floor(list(reversed(search_locations(building, "stairs"))))

    assert list(grouped) == [1, 2, 3]
    assert floor_display_name(building, 2) == "Second Floor"
    assert floor_display_name(building, 8) == "Floor 8"
