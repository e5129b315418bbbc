"""Utility helpers shared across wayfinder modules.

Purpose:
- Planar distance between floor-local positions.
- Stable content fingerprints for building payloads.
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any

from wayfinder.building import Position


def euclidean_distance(a: Position, b: Position) -> float:
    """Straight-line distance on the floor plane (x/y only)."""
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


def fingerprint_payload(payload: dict[str, Any]) -> str:
    """Return a sha256 hex digest of a JSON-compatible payload.

    Keys are sorted so that two payloads with equal content always hash equal.
    """
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
