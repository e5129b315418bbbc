"""Routing graph validation checks for building data quality gates."""

from __future__ import annotations

from typing import Any

from wayfinder.building import BuildingData


def _issue(kind: str, severity: str, floor: int | None, message: str, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"kind": kind, "severity": severity, "floor": floor, "message": message}
    payload.update(extra)
    return payload


def validate_building(building: BuildingData) -> dict[str, Any]:
    """Validate path node references and transition declarations.

    Errors are references the graph builder has to drop (dangling neighbor or
    transition ids, duplicate node ids). Warnings are data the builder accepts
    but authors should make explicit, such as one-sided transitions.
    """
    issues: list[dict[str, Any]] = []
    node_checks = 0
    transition_checks = 0

    node_floor: dict[str, int] = {}
    transition_target: dict[str, str | None] = {}

    for floor in building.floors:
        for node in floor.path_nodes:
            if node.id in node_floor:
                issues.append(
                    _issue(
                        "duplicate_node_id",
                        "error",
                        floor.floor,
                        f"Path node id '{node.id}' is declared more than once",
                        node_id=node.id,
                    )
                )
                continue
            node_floor[node.id] = floor.floor
            transition_target[node.id] = node.transition_to if node.is_transition else None

    for floor in building.floors:
        if floor.locations and not floor.path_nodes:
            issues.append(
                _issue(
                    "floor_without_nodes",
                    "warning",
                    floor.floor,
                    "Floor has locations but no path nodes; routes to it cannot be resolved",
                )
            )

        for location in floor.locations:
            if location.floor != floor.floor:
                issues.append(
                    _issue(
                        "floor_mismatch",
                        "warning",
                        floor.floor,
                        f"Location '{location.id}' declares floor {location.floor}",
                        location_id=location.id,
                    )
                )

        for node in floor.path_nodes:
            node_checks += 1

            if node.floor != floor.floor:
                issues.append(
                    _issue(
                        "floor_mismatch",
                        "warning",
                        floor.floor,
                        f"Path node '{node.id}' declares floor {node.floor}",
                        node_id=node.id,
                    )
                )

            for neighbor_id in node.connections:
                if neighbor_id not in node_floor:
                    issues.append(
                        _issue(
                            "dangling_connection",
                            "error",
                            floor.floor,
                            f"Connection to unknown node '{neighbor_id}'",
                            node_id=node.id,
                            target_id=neighbor_id,
                        )
                    )
                elif node_floor[neighbor_id] != floor.floor:
                    issues.append(
                        _issue(
                            "cross_floor_connection",
                            "warning",
                            floor.floor,
                            f"Connection to '{neighbor_id}' crosses floors; use a transition instead",
                            node_id=node.id,
                            target_id=neighbor_id,
                        )
                    )

            if not node.is_transition:
                continue

            transition_checks += 1
            target = node.transition_to
            if not target:
                issues.append(
                    _issue(
                        "transition_without_target",
                        "warning",
                        floor.floor,
                        "Transition node has no transition_to target",
                        node_id=node.id,
                    )
                )
                continue

            if target not in node_floor:
                issues.append(
                    _issue(
                        "dangling_transition",
                        "error",
                        floor.floor,
                        f"Transition to unknown node '{target}'",
                        node_id=node.id,
                        target_id=target,
                    )
                )
                continue

            if node_floor[target] == floor.floor:
                issues.append(
                    _issue(
                        "transition_same_floor",
                        "warning",
                        floor.floor,
                        f"Transition target '{target}' is on the same floor",
                        node_id=node.id,
                        target_id=target,
                    )
                )

            if transition_target.get(target) != node.id:
                issues.append(
                    _issue(
                        "one_sided_transition",
                        "warning",
                        floor.floor,
                        f"'{target}' does not declare a transition back to '{node.id}'",
                        node_id=node.id,
                        target_id=target,
                    )
                )

    error_count = sum(1 for issue in issues if issue.get("severity") == "error")
    warning_count = sum(1 for issue in issues if issue.get("severity") == "warning")

    return {
        "ok": error_count == 0,
        "summary": {
            "floors": len(building.floors),
            "node_checks": node_checks,
            "transition_checks": transition_checks,
            "errors": error_count,
            "warnings": warning_count,
        },
        "issues": issues,
    }
