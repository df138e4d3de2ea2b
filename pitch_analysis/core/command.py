"""Command metrics derived from classified pitches."""

import math
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .types import ClassifiedPitch, Handedness, NormalizedPoint, ProximityGrade, ZoneId

STRIKE_ZONE_WIDTH_IN = 19
STRIKE_ZONE_HEIGHT_IN = 24

MISS_DIRECTIONS = ("up", "down", "arm", "glove")


def distance(a: NormalizedPoint, b: NormalizedPoint) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def proximity_score(target: NormalizedPoint, actual: NormalizedPoint) -> float:
    """1.0 on target, falling linearly to 0.0 at the unit-square diagonal."""
    return max(0.0, 1.0 - distance(target, actual) / math.sqrt(2))


def miss_direction(target: NormalizedPoint, actual: NormalizedPoint,
                   threshold: float = 0.05,
                   pitcher_hand: Handedness = Handedness.RIGHT) -> Optional[str]:
    """Dominant direction of a miss, or None when within ``threshold`` on both axes.

    In the catcher's view a right-hander's arm side is -x, matching edge_zone_for.
    """
    dx = actual.x - target.x
    dy = actual.y - target.y
    if abs(dx) < threshold and abs(dy) < threshold:
        return None
    if abs(dy) > abs(dx):
        return "up" if dy > 0 else "down"
    if Handedness.parse(pitcher_hand) is Handedness.LEFT:
        dx = -dx
    return "glove" if dx > 0 else "arm"


def miss_pattern(pitches: Iterable[ClassifiedPitch], threshold: float = 0.05,
                 pitcher_hand: Handedness = Handedness.RIGHT) -> Dict[str, float]:
    """Share of misses per direction and the mean miss distance."""
    counts = {direction: 0 for direction in MISS_DIRECTIONS}
    distances: List[float] = []
    for pitch in pitches:
        if pitch.target_location is None:
            continue
        direction = miss_direction(pitch.target_location, pitch.location, threshold, pitcher_hand)
        if direction is None:
            continue
        counts[direction] += 1
        distances.append(distance(pitch.target_location, pitch.location))

    total = len(distances)
    pattern = {
        f"miss_{direction}_pct": (counts[direction] / total * 100) if total else 0.0
        for direction in MISS_DIRECTIONS
    }
    pattern["avg_miss_distance"] = float(np.mean(distances)) if distances else 0.0
    pattern["misses"] = total
    return pattern


def session_summary(pitches: List[ClassifiedPitch]) -> Dict[str, float]:
    """Headline numbers for a logging session."""
    total = len(pitches)
    if total == 0:
        return {"total": 0, "strike_pct": 0.0, "accurate_pct": 0.0, "near_target_pct": 0.0}

    strikes = sum(1 for p in pitches if p.is_strike)
    accurate = sum(1 for p in pitches if p.grade is ProximityGrade.ACCURATE)
    near = sum(1 for p in pitches if p.grade is ProximityGrade.NEAR_TARGET)
    return {
        "total": total,
        "strike_pct": strikes / total * 100,
        "accurate_pct": accurate / total * 100,
        "near_target_pct": near / total * 100,
    }


def cell_center_inches(zone: ZoneId) -> Tuple[float, float]:
    """Cell centre in inches from the middle of the zone, x right and y up."""
    cell_width = STRIKE_ZONE_WIDTH_IN / 3
    cell_height = STRIKE_ZONE_HEIGHT_IN / 3
    return (zone.col - 1) * cell_width, (1 - zone.row) * cell_height


def distance_from_target_inches(intended: ZoneId, actual: ZoneId) -> Dict[str, float]:
    ix, iy = cell_center_inches(intended)
    ax, ay = cell_center_inches(actual)
    dx = ax - ix
    dy = ay - iy
    return {
        "dx_inches": round(dx, 2),
        "dy_inches": round(dy, 2),
        "distance_inches": round(math.hypot(dx, dy), 2),
    }
