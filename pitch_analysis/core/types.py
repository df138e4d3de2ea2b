"""Type definitions for the pitch zone analysis engine."""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

import numpy as np


class InvalidGeometry(ValueError):
    """Raised when grid, surface or target bounds have no positive area."""


class InvalidCoordinate(ValueError):
    """Raised for NaN or infinite coordinates."""


class Handedness(Enum):
    """Batter or pitcher handedness."""
    RIGHT = "R"
    LEFT = "L"

    @classmethod
    def parse(cls, value) -> "Handedness":
        """Accept R/L, RH/LH or right/left in any case."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        if text in ("R", "RH", "RIGHT"):
            return cls.RIGHT
        if text in ("L", "LH", "LEFT"):
            return cls.LEFT
        raise ValueError(f"Unknown handedness: {value!r}")

    @property
    def flipped(self) -> "Handedness":
        return Handedness.LEFT if self is Handedness.RIGHT else Handedness.RIGHT


class ZoneId(Enum):
    """3x3 target grid cells, row digit then column digit (catcher view).

    Row 1 is high, row 3 is low. Column 1 is inside and column 3 is away for
    a right-handed batter.
    """
    Z11 = "Z11"
    Z12 = "Z12"
    Z13 = "Z13"
    Z21 = "Z21"
    Z22 = "Z22"
    Z23 = "Z23"
    Z31 = "Z31"
    Z32 = "Z32"
    Z33 = "Z33"

    @property
    def row(self) -> int:
        return int(self.value[1]) - 1

    @property
    def col(self) -> int:
        return int(self.value[2]) - 1

    @property
    def index(self) -> int:
        return self.row * 3 + self.col

    @classmethod
    def from_row_col(cls, row: int, col: int) -> "ZoneId":
        row = max(0, min(2, int(row)))
        col = max(0, min(2, int(col)))
        return cls(f"Z{row + 1}{col + 1}")

    @classmethod
    def from_index(cls, index: int) -> "ZoneId":
        if not 0 <= index <= 8:
            raise ValueError(f"Zone index out of range: {index}")
        return cls.from_row_col(index // 3, index % 3)


class EdgeZone(Enum):
    """Regions clearly outside the target grid."""
    EDGE_HIGH = "EDGE_HIGH"
    EDGE_LOW = "EDGE_LOW"
    EDGE_ARM = "EDGE_ARM"
    EDGE_GLOVE = "EDGE_GLOVE"


class ProximityGrade(Enum):
    """Per-pitch accuracy grade against an optional aim point."""
    ACCURATE = "accurate"
    NEAR_TARGET = "near_target"
    IN_ZONE = "in_zone"
    OUT_OF_ZONE = "out_of_zone"

    @property
    def is_strike(self) -> bool:
        return self is not ProximityGrade.OUT_OF_ZONE


class TargetState(Enum):
    """Two-step intent -> actual logging states."""
    AWAITING_INTENT = "awaiting_intent"
    AWAITING_ACTUAL = "awaiting_actual"


class CountSituation(Enum):
    """Ball-strike count from the hitter's point of view."""
    AHEAD = "Ahead"
    EVEN = "Even"
    BEHIND = "Behind"


def _require_finite(*values: float):
    for value in values:
        if not math.isfinite(value):
            raise InvalidCoordinate(f"Coordinate must be finite, got {value!r}")


@dataclass(frozen=True)
class Point:
    """Raw 2D point in the caller's frame (screen convention, y grows down)."""
    x: float
    y: float

    def __post_init__(self):
        _require_finite(self.x, self.y)


@dataclass(frozen=True)
class NormalizedPoint:
    """Point in [0, 1] x [0, 1] with y growing upward. Clamped on creation."""
    x: float
    y: float

    def __post_init__(self):
        _require_finite(self.x, self.y)
        object.__setattr__(self, "x", float(np.clip(self.x, 0.0, 1.0)))
        object.__setattr__(self, "y", float(np.clip(self.y, 0.0, 1.0)))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by origin (top-left) and size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def cell_width(self) -> float:
        return self.width / 3

    @property
    def cell_height(self) -> float:
        return self.height / 3

    def validate(self, what: str = "bounds") -> "Rect":
        _require_finite(self.x, self.y, self.width, self.height)
        if self.width <= 0 or self.height <= 0:
            raise InvalidGeometry(
                f"{what} must have positive size, got {self.width}x{self.height}"
            )
        return self

    def contains(self, point: Point) -> bool:
        """Inclusive on every edge."""
        return (self.left <= point.x <= self.right and
                self.top <= point.y <= self.bottom)

    def expanded(self, margin: float) -> "Rect":
        return Rect(self.x - margin, self.y - margin,
                    self.width + 2 * margin, self.height + 2 * margin)

    def cell(self, row: int, col: int) -> "Rect":
        """Rectangle of one cell when this rect is split into a 3x3 grid."""
        return Rect(self.x + col * self.cell_width,
                    self.y + row * self.cell_height,
                    self.cell_width, self.cell_height)


@dataclass(frozen=True)
class SurfaceBounds:
    """Interactable surface with an optional inset scoring area.

    The scoring area is given in the same frame as the surface. Clicks in the
    surface but outside the scoring area are still valid input.
    """
    bounds: Rect
    scoring_area: Optional[Rect] = None

    @property
    def scoring_rect(self) -> Rect:
        return self.scoring_area if self.scoring_area is not None else self.bounds


@dataclass(frozen=True)
class ClassifiedPitch:
    """One logged pitch. Edits produce a new record via with_changes().

    ``zone`` and ``target`` are batter-relative (as returned by zone_for), so
    column 1 is always inside. ``location`` and ``target_location`` stay in
    the catcher-view frame.
    """
    location: NormalizedPoint
    zone: ZoneId
    grade: ProximityGrade
    pitch_category: str
    timestamp: float
    pitcher_id: Optional[str] = None
    batter_hand: Handedness = Handedness.RIGHT
    target: Optional[ZoneId] = None
    target_location: Optional[NormalizedPoint] = None
    balls_before: int = 0
    strikes_before: int = 0

    @property
    def is_strike(self) -> bool:
        return self.grade.is_strike

    def with_changes(self, **changes) -> "ClassifiedPitch":
        return replace(self, **changes)


@dataclass
class RepRecord:
    """Rep/set result as stored by session logging."""
    player_id: str
    executed: float
    attempted: float
    zones: List[str] = field(default_factory=list)
    pitch_categories: List[str] = field(default_factory=list)
    count_situation: Optional[CountSituation] = None
    drill_type: Optional[str] = None


@dataclass
class ZoneStat:
    """Executed/attempted accumulator for a single key."""
    executed: float = 0.0
    attempted: float = 0.0

    @property
    def pct(self) -> Optional[float]:
        if self.attempted <= 0:
            return None
        return self.executed / self.attempted * 100

    def add(self, executed: float, attempted: float):
        if executed < 0 or attempted < 0:
            raise ValueError("Counts must be non-negative")
        if self.executed + executed > self.attempted + attempted:
            raise ValueError(
                f"executed ({self.executed + executed}) would exceed "
                f"attempted ({self.attempted + attempted})"
            )
        self.executed += executed
        self.attempted += attempted


@dataclass
class ZoneConfig:
    """Tunable thresholds for classification and ranking."""
    # Classification
    near_target_ratio: float = 0.35
    edge_margin: float = 0.05
    miss_threshold: float = 0.05

    # Sample-size gates
    player_min_samples: int = 10
    team_min_samples: int = 20

    # Reporting
    top_performers: int = 3
    weak_spot_gap: float = 10.0
