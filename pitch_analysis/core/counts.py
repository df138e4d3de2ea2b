"""Ball-strike count tracking for simulated at-bats."""

from dataclasses import dataclass

from .types import CountSituation, ProximityGrade

MAX_BALLS = 4
MAX_STRIKES = 3


def count_key(balls: int, strikes: int) -> str:
    """Breakdown key for a count, e.g. "3-2"."""
    return f"{balls}-{strikes}"


def count_situation(balls: int, strikes: int) -> CountSituation:
    """Situation from the hitter's side: more balls is ahead."""
    if balls > strikes:
        return CountSituation.AHEAD
    if strikes > balls:
        return CountSituation.BEHIND
    return CountSituation.EVEN


@dataclass
class CountTracker:
    """Running count synced to graded pitches.

    Every grade except OUT_OF_ZONE adds a strike. Counts saturate at a walk
    or strikeout and never go below zero on undo.
    """
    balls: int = 0
    strikes: int = 0

    def apply(self, grade: ProximityGrade):
        if grade.is_strike:
            self.strikes = min(MAX_STRIKES, self.strikes + 1)
        else:
            self.balls = min(MAX_BALLS, self.balls + 1)

    def undo(self, grade: ProximityGrade):
        """Roll back the effect of a removed pitch."""
        if grade.is_strike:
            self.strikes = max(0, self.strikes - 1)
        else:
            self.balls = max(0, self.balls - 1)

    def reset(self):
        self.balls = 0
        self.strikes = 0

    @property
    def count_key(self) -> str:
        return count_key(self.balls, self.strikes)

    @property
    def situation(self) -> CountSituation:
        return count_situation(self.balls, self.strikes)

    @property
    def is_complete(self) -> bool:
        return self.balls >= MAX_BALLS or self.strikes >= MAX_STRIKES
