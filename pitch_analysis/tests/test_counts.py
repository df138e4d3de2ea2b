"""Tests for ball-strike count tracking."""

from pitch_analysis.core import CountTracker, CountSituation, ProximityGrade, count_key, count_situation


class TestCountTracker:
    """Test count updates from graded pitches."""

    def setup_method(self):
        """Set up test fixtures."""
        self.tracker = CountTracker()

    def test_grades_map_to_balls_and_strikes(self):
        """Test every graded strike adds a strike and misses add a ball."""
        self.tracker.apply(ProximityGrade.NEAR_TARGET)
        self.tracker.apply(ProximityGrade.OUT_OF_ZONE)
        self.tracker.apply(ProximityGrade.IN_ZONE)

        assert self.tracker.count_key == "1-2"
        assert self.tracker.situation == CountSituation.BEHIND

    def test_saturates(self):
        """Test counts stop at a walk or strikeout."""
        for _ in range(6):
            self.tracker.apply(ProximityGrade.OUT_OF_ZONE)
            self.tracker.apply(ProximityGrade.ACCURATE)

        assert (self.tracker.balls, self.tracker.strikes) == (4, 3)
        assert self.tracker.is_complete

    def test_undo_never_goes_negative(self):
        """Test undo floors at zero."""
        self.tracker.undo(ProximityGrade.ACCURATE)
        self.tracker.undo(ProximityGrade.OUT_OF_ZONE)

        assert (self.tracker.balls, self.tracker.strikes) == (0, 0)

    def test_reset(self):
        """Test reset starts a fresh at-bat."""
        self.tracker.apply(ProximityGrade.OUT_OF_ZONE)
        self.tracker.reset()

        assert self.tracker.count_key == "0-0"
        assert not self.tracker.is_complete


class TestCountHelpers:
    """Test count keys and situations."""

    def test_count_key(self):
        assert count_key(3, 2) == "3-2"

    def test_situations(self):
        """Test situations from the hitter's side."""
        assert count_situation(2, 0) == CountSituation.AHEAD
        assert count_situation(0, 2) == CountSituation.BEHIND
        assert count_situation(1, 1) == CountSituation.EVEN
