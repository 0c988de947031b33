"""Tests for the persistent score ledger."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from decryption.score_ledger import ScoreLedger


class TestScoring:
    """Test cases for the scoring table."""

    def test_scores_by_attempt(self):
        """Test the table for attempts 1 through 5."""
        assert [ScoreLedger.score_for_attempt(n) for n in range(1, 6)] == [200, 150, 100, 50, 0]

    @pytest.mark.parametrize("attempt", [0, -1, 6, 100])
    def test_out_of_range_attempts_score_zero(self, attempt):
        """Test attempts outside 1-5 are worth nothing."""
        assert ScoreLedger.score_for_attempt(attempt) == 0


class TestScoreLedgerRecording:
    """Test cases for recording round results."""

    def setup_method(self):
        """Setup for each test."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.path = self.temp_dir / "scores.json"
        self.ledger = ScoreLedger(self.path)

    def test_fresh_ledger_is_zeroed(self):
        """Test a missing file starts from zero with seeded distribution keys."""
        assert self.ledger.total_score == 0
        assert self.ledger.games_played == 0
        assert self.ledger.games_won == 0
        assert self.ledger.attempt_distribution == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
        assert self.ledger.win_percentage == 0.0

    def test_record_win(self):
        """Test a win updates every counter."""
        points = self.ledger.record_result(True, 2)

        assert points == 150
        assert self.ledger.games_played == 1
        assert self.ledger.games_won == 1
        assert self.ledger.total_score == 150
        assert self.ledger.attempt_distribution[2] == 1

    def test_record_loss(self):
        """Test a loss only counts the game."""
        points = self.ledger.record_result(False, 5)

        assert points == 0
        assert self.ledger.games_played == 1
        assert self.ledger.games_won == 0
        assert self.ledger.total_score == 0
        assert sum(self.ledger.attempt_distribution.values()) == 0

    def test_distribution_counts_wins_only(self):
        """Test N wins at attempt k give N at key k regardless of losses."""
        for _ in range(3):
            self.ledger.record_result(True, 4)
        self.ledger.record_result(False, 5)
        self.ledger.record_result(False, 5)

        assert self.ledger.attempt_distribution[4] == 3
        assert sum(self.ledger.attempt_distribution.values()) == 3
        assert self.ledger.games_played == 5
        assert self.ledger.games_won <= self.ledger.games_played

    def test_win_percentage(self):
        """Test win percentage calculation."""
        self.ledger.record_result(True, 1)
        self.ledger.record_result(False, 5)
        assert self.ledger.win_percentage == 50.0

    def test_record_persists(self):
        """Test every recorded result is written to disk."""
        self.ledger.record_result(True, 1)

        data = json.loads(self.path.read_text())
        assert data["total_score"] == 200
        assert data["games_played"] == 1
        assert data["attempt_distribution"]["1"] == 1

    def test_reset(self):
        """Test reset zeroes and persists."""
        self.ledger.record_result(True, 1)
        self.ledger.reset()

        reloaded = ScoreLedger(self.path)
        assert reloaded.games_played == 0
        assert reloaded.total_score == 0


class TestScoreLedgerPersistence:
    """Test cases for loading and saving the ledger."""

    def setup_method(self):
        """Setup for each test."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.path = self.temp_dir / "scores.json"

    def test_round_trip(self):
        """Test persisted values reload identically."""
        ledger = ScoreLedger.from_dict(
            {
                "total_score": 350,
                "games_played": 3,
                "games_won": 2,
                "attempt_distribution": {1: 1, 2: 1},
            },
            path=self.path,
        )
        assert ledger.persist() is True

        reloaded = ScoreLedger(self.path)
        assert reloaded.total_score == 350
        assert reloaded.games_played == 3
        assert reloaded.games_won == 2
        assert reloaded.attempt_distribution == {1: 1, 2: 1, 3: 0, 4: 0, 5: 0}

    def test_corrupt_file_starts_fresh(self):
        """Test unparseable JSON is treated as a fresh ledger."""
        self.path.write_text("{not json")
        ledger = ScoreLedger(self.path)
        assert ledger.games_played == 0
        assert ledger.total_score == 0

    def test_missing_fields_start_fresh(self):
        """Test an incomplete record is treated as corrupt."""
        self.path.write_text(json.dumps({"total_score": 100}))
        ledger = ScoreLedger(self.path)
        assert ledger.total_score == 0

    def test_inconsistent_counts_start_fresh(self):
        """Test games_won above games_played is rejected."""
        self.path.write_text(json.dumps({
            "total_score": 100,
            "games_played": 1,
            "games_won": 4,
            "attempt_distribution": {},
        }))
        ledger = ScoreLedger(self.path)
        assert ledger.games_won == 0
        assert ledger.games_played == 0

    def test_non_object_record_starts_fresh(self):
        """Test a JSON list is treated as corrupt."""
        self.path.write_text("[1, 2, 3]")
        ledger = ScoreLedger(self.path)
        assert ledger.games_played == 0

    def test_persist_creates_parent_directory(self):
        """Test the ledger directory is created on first write."""
        nested = self.temp_dir / "nested" / "dir" / "scores.json"
        ledger = ScoreLedger(nested)
        ledger.record_result(True, 3)
        assert nested.exists()

    def test_persist_failure_is_not_fatal(self):
        """Test write errors are logged, not raised."""
        ledger = ScoreLedger(self.path)
        with patch("decryption.score_ledger.os.replace", side_effect=OSError("disk full")):
            assert ledger.persist() is False
        assert not self.path.exists()
        assert list(self.temp_dir.iterdir()) == []

    def test_in_memory_ledger(self):
        """Test a ledger without a path never touches disk."""
        ledger = ScoreLedger(path=None)
        ledger.record_result(True, 1)
        assert ledger.total_score == 200
        assert ledger.persist() is False
