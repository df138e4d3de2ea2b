"""Pitch logging session tying normalization, zoning and grading together."""

import logging
from typing import List, Optional

from .command import miss_pattern, session_summary
from .counts import CountTracker
from .geometry import normalize
from .proximity import ProximityClassifier, Target
from .types import (
    ClassifiedPitch, EdgeZone, Handedness, Point, SurfaceBounds, ZoneConfig, ZoneId
)
from .zones import edge_zone_for, mirror_zone, zone_center, zone_for

logger = logging.getLogger(__name__)


class PitchSession:
    """In-memory log of classified pitches for one bullpen or live session.

    The session owns its classifier and count; callers supply geometry and
    raw clicks and get immutable ClassifiedPitch records back.
    """

    def __init__(self, surface: SurfaceBounds, pitcher_id: Optional[str] = None,
                 pitcher_hand: Handedness = Handedness.RIGHT,
                 batter_hand: Handedness = Handedness.RIGHT,
                 config: Optional[ZoneConfig] = None,
                 track_count: bool = True):
        """Initialize a session over a surface whose scoring area is the grid."""
        self.config = config or ZoneConfig()
        self.surface = surface
        self.pitcher_id = pitcher_id
        self.pitcher_hand = pitcher_hand
        self.classifier = ProximityClassifier(
            grid=surface.scoring_rect.validate("grid"),
            near_target_ratio=self.config.near_target_ratio,
            batter_hand=batter_hand,
        )
        self.count = CountTracker()
        self.track_count = track_count
        self.pitches: List[ClassifiedPitch] = []

    @property
    def batter_hand(self) -> Handedness:
        return self.classifier.batter_hand

    def set_target(self, target: Target, pinned: bool = False):
        self.classifier.set_target(target, pinned)

    def toggle_batter_hand(self) -> Handedness:
        return self.classifier.flip_batter_hand()

    def log_pitch(self, point: Point, pitch_category: str, timestamp: float) -> ClassifiedPitch:
        """Classify a raw click and append it to the session."""
        target = self.classifier.target
        target_zone = target if isinstance(target, ZoneId) else None
        balls, strikes = self.count.balls, self.count.strikes

        grade = self.classifier.classify(point)
        location = normalize(point, self.surface)
        pitch = ClassifiedPitch(
            location=location,
            zone=zone_for(location, self.batter_hand),
            grade=grade,
            pitch_category=pitch_category,
            timestamp=timestamp,
            pitcher_id=self.pitcher_id,
            batter_hand=self.batter_hand,
            target=self._relative(target_zone),
            target_location=zone_center(target_zone) if target_zone is not None else None,
            balls_before=balls,
            strikes_before=strikes,
        )
        self.pitches.append(pitch)
        if self.track_count:
            self.count.apply(grade)
        logger.debug(f"Logged pitch {len(self.pitches)} | zone={pitch.zone.value} | "
                     f"grade={grade.value} | count={self.count.count_key}")
        return pitch

    def _relative(self, zone: Optional[ZoneId]) -> Optional[ZoneId]:
        """Grid cell -> batter-relative zone, matching ClassifiedPitch.zone."""
        if zone is None:
            return None
        return mirror_zone(zone, self.batter_hand is Handedness.LEFT)

    def edge_zone(self, point: Point) -> Optional[EdgeZone]:
        return edge_zone_for(point, self.surface, self.pitcher_hand, self.config.edge_margin)

    def undo(self) -> Optional[ClassifiedPitch]:
        """Remove the last pitch and roll back its effect on the count."""
        if not self.pitches:
            return None
        pitch = self.pitches.pop()
        if self.track_count:
            self.count.undo(pitch.grade)
        return pitch

    def replace(self, pitch: ClassifiedPitch, **changes) -> ClassifiedPitch:
        """Swap a logged pitch for an edited copy. The original is untouched."""
        for i, existing in enumerate(self.pitches):
            if existing is pitch:
                updated = pitch.with_changes(**changes)
                self.pitches[i] = updated
                return updated
        raise ValueError("Pitch is not part of this session")

    def remove(self, pitch: ClassifiedPitch):
        for i, existing in enumerate(self.pitches):
            if existing is pitch:
                del self.pitches[i]
                return
        raise ValueError("Pitch is not part of this session")

    def summary(self) -> dict:
        return session_summary(self.pitches)

    def miss_pattern(self) -> dict:
        """Miss directions for this pitcher using the configured threshold."""
        return miss_pattern(self.pitches, self.config.miss_threshold, self.pitcher_hand)
