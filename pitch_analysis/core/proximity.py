"""Pitch accuracy grading against an optional aim point."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .types import (
    Handedness, InvalidGeometry, Point, ProximityGrade, Rect, TargetState, ZoneId
)
from .zones import mirror_zone, zone_label

logger = logging.getLogger(__name__)

NEAR_TARGET_RATIO = 0.35

Target = Union[ZoneId, Rect]


def target_rect(grid: Rect, target: Target) -> Rect:
    """Resolve a target zone (or explicit rect) to a rectangle in the grid frame."""
    if isinstance(target, ZoneId):
        return grid.cell(target.row, target.col)
    if isinstance(target, Rect):
        return target.validate("target")
    raise TypeError(f"Unsupported target type: {type(target).__name__}")


def classify_pitch(point: Point, grid: Rect, target: Optional[Target] = None,
                   near_ratio: float = NEAR_TARGET_RATIO) -> ProximityGrade:
    """Grade a pitch location.

    Tests run in priority order and the first match wins: inside the target
    cell, inside the target cell grown by ``near_ratio`` of a cell width on
    every side, inside the grid, outside the grid. All edges are inclusive.
    The near margin is derived from cell width on both axes, which matters
    only once cells stop being square.
    """
    grid.validate("grid")
    in_zone = grid.contains(point)

    if target is None:
        return ProximityGrade.IN_ZONE if in_zone else ProximityGrade.OUT_OF_ZONE

    cell = target_rect(grid, target)
    if cell.contains(point):
        return ProximityGrade.ACCURATE
    if cell.expanded(grid.cell_width * near_ratio).contains(point):
        return ProximityGrade.NEAR_TARGET
    if in_zone:
        return ProximityGrade.IN_ZONE
    return ProximityGrade.OUT_OF_ZONE


@dataclass
class ProximityClassifier:
    """Two-step intent -> actual grading for a pitch-logging session.

    Setting a target moves to AWAITING_ACTUAL. The next classification
    consumes it and returns to AWAITING_INTENT unless the target is pinned.
    """
    grid: Optional[Rect] = None
    near_target_ratio: float = NEAR_TARGET_RATIO
    batter_hand: Handedness = Handedness.RIGHT
    state: TargetState = TargetState.AWAITING_INTENT
    target: Optional[Target] = None
    pinned: bool = False

    def set_grid(self, grid: Rect):
        self.grid = grid.validate("grid")

    def set_target(self, target: Target, pinned: bool = False):
        """Record the intended location for the next pitch."""
        if self.grid is not None:
            target_rect(self.grid, target)
        self.target = target
        self.pinned = pinned
        self.state = TargetState.AWAITING_ACTUAL

    def pin_target(self, pinned: bool = True):
        self.pinned = pinned

    def clear_target(self):
        self.target = None
        self.pinned = False
        self.state = TargetState.AWAITING_INTENT

    def flip_batter_hand(self) -> Handedness:
        """Toggle batter hand, keeping the stored target's semantic location.

        An explicit rectangle target can only be mirrored across a known grid.
        """
        if isinstance(self.target, Rect) and self.grid is None:
            raise InvalidGeometry("Cannot mirror a rectangle target before the grid is known")
        self.batter_hand = self.batter_hand.flipped
        if isinstance(self.target, ZoneId):
            self.target = mirror_zone(self.target)
        elif isinstance(self.target, Rect):
            t = self.target
            self.target = Rect(self.grid.left + self.grid.right - t.right, t.y, t.width, t.height)
        return self.batter_hand

    def target_label(self) -> str:
        if self.target is None:
            return "None"
        if isinstance(self.target, ZoneId):
            return zone_label(self.target, self.batter_hand)
        return "Custom"

    def classify(self, point: Point, grid: Optional[Rect] = None) -> ProximityGrade:
        """Grade one pitch and advance the target state."""
        grid = grid if grid is not None else self.grid
        if grid is None:
            raise InvalidGeometry("Grid bounds are not known yet")

        target = self.target if self.state is TargetState.AWAITING_ACTUAL else None
        grade = classify_pitch(point, grid, target, self.near_target_ratio)
        logger.debug(f"classify | point=({point.x:.1f}, {point.y:.1f}) | "
                     f"target={getattr(target, 'value', target)} | "
                     f"state={self.state.value} | grade={grade.value}")

        if self.state is TargetState.AWAITING_ACTUAL and not self.pinned:
            self.clear_target()
        return grade
