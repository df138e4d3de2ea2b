"""Tests for the zone report script."""

from pitch_analysis.core import CountSituation
from pitch_analysis.scripts.zone_report import load_rep_records, main


class TestZoneReport:
    """Test CSV loading and the command line entry point."""

    def test_load_rep_records(self, tmp_path):
        """Test semicolon-separated zones and optional columns."""
        path = tmp_path / "reps.csv"
        path.write_text(
            "player_id,executed,attempted,zones,pitch_categories,count_situation,drill_type\n"
            "p1,6,10,Inside High;Outside Low,,Behind,Tee Work\n"
            "p2,4,4,,Fastball,,\n"
        )

        records = load_rep_records(str(path))

        assert records[0].zones == ["Inside High", "Outside Low"]
        assert records[0].count_situation == CountSituation.BEHIND
        assert records[0].drill_type == "Tee Work"
        assert records[1].zones == []
        assert records[1].pitch_categories == ["Fastball"]
        assert records[1].count_situation is None
        assert records[1].drill_type is None

    def test_sample_report(self, capsys):
        """Test the sample report ranks drill types."""
        assert main(['--sample', '--dimension', 'drill_type']) == 0

        out = capsys.readouterr().out
        assert "Execution by drill_type" in out
        assert "Tee Work" in out
        assert "Total sets processed: 6" in out

    def test_missing_input(self, tmp_path, capsys):
        """Test a missing rep file is reported."""
        assert main(['--reps', str(tmp_path / "absent.csv")]) == 1
        assert main([]) == 1
        assert "Error" in capsys.readouterr().out

    def test_count_situation_any_case(self, tmp_path):
        """Test count situations are read regardless of case."""
        path = tmp_path / "reps.csv"
        path.write_text(
            "player_id,executed,attempted,count_situation\n"
            "p1,3,5,ahead\n"
            "p2,2,5, BEHIND\n"
        )

        records = load_rep_records(str(path))

        assert records[0].count_situation == CountSituation.AHEAD
        assert records[1].count_situation == CountSituation.BEHIND

    def test_unknown_count_situation(self, tmp_path, capsys):
        """Test an unreadable value is reported as a one-line error."""
        path = tmp_path / "reps.csv"
        path.write_text("player_id,executed,attempted,count_situation\np1,3,5,full\n")

        assert main(['--reps', str(path)]) == 1

        out = capsys.readouterr().out
        assert "Error: Invalid rep file" in out
        assert "'full'" in out
