"""Zone mapping and handedness mirroring for the 3x3 target grid.

Grid cells are addressed from the catcher's view: row 0 is high, column 0 is
the left side of the plate. For a right-handed batter column 0 is inside and
column 2 is away. ``zone_for`` returns batter-relative zones, so column 0 is
always the batter's inside half regardless of which box they stand in.
"""

from typing import Dict, Optional, Tuple, Union

import numpy as np

from .geometry import fraction_within
from .types import EdgeZone, Handedness, NormalizedPoint, Point, SurfaceBounds, ZoneId

ZoneLike = Union[ZoneId, int, Tuple[int, int]]

ROW_NAMES = ("High", "Middle", "Low")
COL_NAMES = ("In", "Middle", "Away")

SHORT_LABELS: Dict[ZoneId, str] = {
    ZoneId.Z11: "High-In",
    ZoneId.Z12: "High-Mid",
    ZoneId.Z13: "High-Away",
    ZoneId.Z21: "Mid-In",
    ZoneId.Z22: "Middle",
    ZoneId.Z23: "Mid-Away",
    ZoneId.Z31: "Low-In",
    ZoneId.Z32: "Low-Mid",
    ZoneId.Z33: "Low-Away",
}


def _needs_mirror(hand: Optional[Handedness]) -> bool:
    return hand is not None and Handedness.parse(hand) is Handedness.LEFT


def grid_row_col(point: NormalizedPoint) -> Tuple[int, int]:
    """Floor-bucket a normalized point into (row, col), row 0 on top."""
    col = int(np.clip(np.floor(point.x * 3), 0, 2))
    row = int(np.clip(np.floor((1.0 - point.y) * 3), 0, 2))
    return row, col


def mirror_column(col: int, handedness_changed: bool = True) -> int:
    """Flip a column index across the middle of the plate."""
    if not 0 <= col <= 2:
        raise ValueError(f"Column out of range: {col}")
    return 2 - col if handedness_changed else col


def mirror_zone(zone: ZoneLike, handedness_changed: bool = True) -> ZoneLike:
    """Mirror a zone, zone index or (row, col) pair horizontally.

    Used to carry a stored target across a batter-hand toggle so the aim point
    keeps its meaning ("low and away") instead of its screen position. The
    result has the same type as the input. Applying it twice is a no-op.
    """
    if isinstance(zone, ZoneId):
        return ZoneId.from_row_col(zone.row, mirror_column(zone.col, handedness_changed))
    if isinstance(zone, tuple):
        row, col = zone
        return row, mirror_column(col, handedness_changed)
    if isinstance(zone, (int, np.integer)) and not isinstance(zone, bool):
        if not 0 <= zone <= 8:
            raise ValueError(f"Zone index out of range: {zone}")
        row, col = divmod(int(zone), 3)
        return row * 3 + mirror_column(col, handedness_changed)
    raise TypeError(f"Cannot mirror {type(zone).__name__}")


def zone_for(point: NormalizedPoint, batter_hand: Optional[Handedness] = None) -> ZoneId:
    """Zone of a normalized point, relative to the batter.

    Left-handed batters have the column mirrored before the zone is built so
    that column 0 stays the inside edge for them.
    """
    row, col = grid_row_col(point)
    if _needs_mirror(batter_hand):
        col = mirror_column(col)
    return ZoneId.from_row_col(row, col)


def zone_counts(points, batter_hand: Optional[Handedness] = None) -> np.ndarray:
    """3x3 histogram of normalized (N, 2) points, indexed [row, col]."""
    pts = np.clip(np.asarray(points, dtype=float).reshape(-1, 2), 0.0, 1.0)
    cols = np.clip(np.floor(pts[:, 0] * 3), 0, 2).astype(int)
    rows = np.clip(np.floor((1.0 - pts[:, 1]) * 3), 0, 2).astype(int)
    if _needs_mirror(batter_hand):
        cols = 2 - cols
    counts = np.zeros((3, 3), dtype=int)
    np.add.at(counts, (rows, cols), 1)
    return counts


def zone_center(zone: ZoneId) -> NormalizedPoint:
    """Centre of a cell in normalized coordinates (y up)."""
    return NormalizedPoint(zone.col / 3 + 1 / 6, 1 - (zone.row / 3 + 1 / 6))


def zone_label(zone: ZoneId, batter_hand: Handedness = Handedness.RIGHT) -> str:
    """Semantic label such as "Low Away" for a grid cell.

    The cell is read from the catcher's view, so a left-handed batter swaps
    In and Away. Pass RIGHT for zones that are already batter-relative.
    """
    col = mirror_column(zone.col, _needs_mirror(batter_hand))
    return f"{ROW_NAMES[zone.row]} {COL_NAMES[col]}"


def short_zone_label(zone: ZoneId) -> str:
    return SHORT_LABELS[zone]


def target_zone_name(zone: ZoneId, batter_hand: Handedness = Handedness.RIGHT) -> str:
    """Breakdown key used by coach reports, e.g. "Outside Low"."""
    col = mirror_column(zone.col, _needs_mirror(batter_hand))
    side = ("Inside", "Middle", "Outside")[col]
    return f"{side} {ROW_NAMES[zone.row]}"


def edge_zone_for(point: Point, surface: SurfaceBounds,
                  pitcher_hand: Handedness = Handedness.RIGHT,
                  margin: float = 0.05) -> Optional[EdgeZone]:
    """Name the side of the grid a clearly-outside pitch missed on.

    The scoring area is grown by ``margin`` (in units of the full surface) to
    allow for the ball touching the edge. Vertical misses win over horizontal
    ones. Returns None when the pitch is within the grown grid.
    """
    x, y = fraction_within(point, surface.bounds)
    scoring = surface.scoring_rect.validate("scoring area")
    bounds = surface.bounds
    grid_left = (scoring.left - bounds.left) / bounds.width
    grid_right = (scoring.right - bounds.left) / bounds.width
    grid_bottom = 1.0 - (scoring.bottom - bounds.top) / bounds.height
    grid_top = 1.0 - (scoring.top - bounds.top) / bounds.height

    if y > grid_top + margin:
        return EdgeZone.EDGE_HIGH
    if y < grid_bottom - margin:
        return EdgeZone.EDGE_LOW
    # Catcher view: a right-hander's arm side is on the left.
    right_handed = Handedness.parse(pitcher_hand) is Handedness.RIGHT
    if x < grid_left - margin:
        return EdgeZone.EDGE_ARM if right_handed else EdgeZone.EDGE_GLOVE
    if x > grid_right + margin:
        return EdgeZone.EDGE_GLOVE if right_handed else EdgeZone.EDGE_ARM
    return None
