"""Tests for proximity grading."""

import pytest

from pitch_analysis.core import (
    ProximityClassifier, classify_pitch, target_rect,
    ProximityGrade, TargetState, Handedness, ZoneId, Point, Rect, InvalidGeometry
)


class TestClassifyPitch:
    """Test the pure grading function."""

    def setup_method(self):
        """Set up test fixtures."""
        # 60x60 grid, so each cell is 20x20 and the near margin is 7
        self.grid = Rect(20, 20, 60, 60)
        self.target = ZoneId.Z33

    def test_target_cell_geometry(self):
        """Test the low-away cell resolves to the bottom-right square."""
        cell = target_rect(self.grid, self.target)

        assert (cell.left, cell.top, cell.right, cell.bottom) == (60, 60, 80, 80)

    def test_accurate(self):
        """Test a pitch inside the target cell."""
        assert classify_pitch(Point(70, 70), self.grid, self.target) == ProximityGrade.ACCURATE
        assert classify_pitch(Point(77, 77), self.grid, self.target) == ProximityGrade.ACCURATE

    def test_near_target_inside_grid(self):
        """Test a pitch just left of the target cell."""
        assert classify_pitch(Point(55, 70), self.grid, self.target) == ProximityGrade.NEAR_TARGET

    def test_near_target_beats_out_of_zone(self):
        """Test the grown box wins over the grid test past the grid edge."""
        grade = classify_pitch(Point(85, 85), self.grid, self.target)

        assert grade == ProximityGrade.NEAR_TARGET

    def test_in_zone(self):
        """Test a pitch in the grid far from the target."""
        assert classify_pitch(Point(25, 25), self.grid, self.target) == ProximityGrade.IN_ZONE

    def test_out_of_zone(self):
        """Test pitches outside the grid and the near box."""
        assert classify_pitch(Point(5, 5), self.grid, self.target) == ProximityGrade.OUT_OF_ZONE
        assert classify_pitch(Point(95, 95), self.grid, self.target) == ProximityGrade.OUT_OF_ZONE

    def test_accurate_wins_over_everything(self):
        """Test a point passing every geometric test is graded ACCURATE."""
        point = Point(65, 65)
        cell = target_rect(self.grid, self.target)

        assert cell.expanded(self.grid.cell_width * 0.35).contains(point)
        assert self.grid.contains(point)
        assert classify_pitch(point, self.grid, self.target) == ProximityGrade.ACCURATE

    def test_edges_are_inclusive(self):
        """Test boundary points count as inside."""
        assert classify_pitch(Point(60, 60), self.grid, self.target) == ProximityGrade.ACCURATE
        assert classify_pitch(Point(80, 80), self.grid, self.target) == ProximityGrade.ACCURATE
        assert classify_pitch(Point(20, 20), self.grid) == ProximityGrade.IN_ZONE
        assert classify_pitch(Point(80, 20), self.grid) == ProximityGrade.IN_ZONE

    def test_without_target(self):
        """Test only strike/ball grades are possible without a target."""
        assert classify_pitch(Point(70, 70), self.grid) == ProximityGrade.IN_ZONE
        assert classify_pitch(Point(85, 85), self.grid) == ProximityGrade.OUT_OF_ZONE

    def test_explicit_rect_target(self):
        """Test a custom rectangle can be the aim point."""
        target = Rect(40, 40, 10, 10)

        assert classify_pitch(Point(45, 45), self.grid, target) == ProximityGrade.ACCURATE
        # margin still derives from the grid's cell width (7 units)
        assert classify_pitch(Point(56, 45), self.grid, target) == ProximityGrade.NEAR_TARGET
        assert classify_pitch(Point(60, 45), self.grid, target) == ProximityGrade.IN_ZONE

    def test_near_margin_uses_cell_width_for_both_axes(self):
        """Test a tall grid still grows the target by a share of the width."""
        grid = Rect(0, 0, 30, 90)  # cells are 10 wide and 30 tall
        # target Z11 spans y 0..30; margin is 3.5 on both axes
        assert classify_pitch(Point(5, 33), grid, ZoneId.Z11) == ProximityGrade.NEAR_TARGET
        assert classify_pitch(Point(5, 34), grid, ZoneId.Z11) == ProximityGrade.IN_ZONE

    def test_degenerate_grid(self):
        """Test zero-area grids are rejected."""
        with pytest.raises(InvalidGeometry):
            classify_pitch(Point(1, 1), Rect(0, 0, 0, 10))

        with pytest.raises(InvalidGeometry):
            classify_pitch(Point(1, 1), self.grid, Rect(0, 0, 5, -1))


class TestProximityClassifier:
    """Test the two-step target state machine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ProximityClassifier(grid=Rect(20, 20, 60, 60))

    def test_initial_state(self):
        """Test a fresh classifier waits for an intent."""
        assert self.classifier.state == TargetState.AWAITING_INTENT
        assert self.classifier.target is None
        assert self.classifier.target_label() == "None"

    def test_target_consumed_by_one_pitch(self):
        """Test the target applies to exactly one classification."""
        self.classifier.set_target(ZoneId.Z33)
        assert self.classifier.state == TargetState.AWAITING_ACTUAL

        first = self.classifier.classify(Point(70, 70))
        second = self.classifier.classify(Point(70, 70))

        assert first == ProximityGrade.ACCURATE
        assert second == ProximityGrade.IN_ZONE
        assert self.classifier.state == TargetState.AWAITING_INTENT
        assert self.classifier.target is None

    def test_pinned_target_persists(self):
        """Test a pinned target is reused for repeated drilling."""
        self.classifier.set_target(ZoneId.Z33, pinned=True)

        grades = [self.classifier.classify(Point(70, 70)) for _ in range(3)]

        assert grades == [ProximityGrade.ACCURATE] * 3
        assert self.classifier.state == TargetState.AWAITING_ACTUAL

        self.classifier.pin_target(False)
        self.classifier.classify(Point(70, 70))
        assert self.classifier.state == TargetState.AWAITING_INTENT

    def test_clear_target(self):
        """Test clearing returns to the intent state."""
        self.classifier.set_target(ZoneId.Z11)
        self.classifier.clear_target()

        assert self.classifier.state == TargetState.AWAITING_INTENT
        assert self.classifier.classify(Point(25, 25)) == ProximityGrade.IN_ZONE

    def test_flip_batter_hand_moves_target(self):
        """Test a low-away target stays low-away when the batter switches."""
        self.classifier.set_target(ZoneId.Z33)
        assert self.classifier.target_label() == "Low Away"

        hand = self.classifier.flip_batter_hand()

        assert hand == Handedness.LEFT
        assert self.classifier.target == ZoneId.Z31
        assert self.classifier.target_label() == "Low Away"
        assert self.classifier.classify(Point(30, 70)) == ProximityGrade.ACCURATE

    def test_flip_mirrors_rect_target(self):
        """Test explicit rectangles mirror across the grid centre."""
        self.classifier.set_target(Rect(65, 30, 10, 10))
        self.classifier.flip_batter_hand()

        assert self.classifier.target == Rect(25, 30, 10, 10)

    def test_flip_rect_target_without_grid(self):
        """Test a rectangle target cannot silently keep its screen position."""
        classifier = ProximityClassifier()
        classifier.set_target(Rect(65, 30, 10, 10))

        with pytest.raises(InvalidGeometry):
            classifier.flip_batter_hand()

        assert classifier.batter_hand == Handedness.RIGHT
        assert classifier.target == Rect(65, 30, 10, 10)

    def test_flip_zone_target_without_grid(self):
        """Test zone targets mirror without grid bounds."""
        classifier = ProximityClassifier()
        classifier.set_target(ZoneId.Z33)
        classifier.flip_batter_hand()

        assert classifier.target == ZoneId.Z31
        assert classifier.classify(Point(30, 70), Rect(20, 20, 60, 60)) == ProximityGrade.ACCURATE

    def test_classify_without_grid(self):
        """Test classification before geometry is known fails."""
        classifier = ProximityClassifier()

        with pytest.raises(InvalidGeometry):
            classifier.classify(Point(1, 1))

    def test_grid_argument_overrides(self):
        """Test a grid passed per call is used."""
        classifier = ProximityClassifier()
        grade = classifier.classify(Point(5, 5), Rect(0, 0, 10, 10))

        assert grade == ProximityGrade.IN_ZONE

    def test_set_target_validates_rect(self):
        """Test degenerate target rectangles are rejected up front."""
        with pytest.raises(InvalidGeometry):
            self.classifier.set_target(Rect(30, 30, 0, 5))
