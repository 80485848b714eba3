"""Distance helpers for normalised landmarks."""

from __future__ import annotations

import math

from face_tension.models import Landmark


def dist_2d(a: Landmark, b: Landmark) -> float:
    """Planar Euclidean distance between two landmarks; ``z`` is ignored."""
    return math.hypot(a.x - b.x, a.y - b.y)
