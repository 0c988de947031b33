"""Persistent lifetime statistics for Decryption."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_PATH = Path.home() / ".decryption" / "scores.json"


class ScoreLedger:
    """Lifetime score, games played/won and per-attempt win distribution.

    The ledger is loaded when constructed and written back after every
    mutation. A missing or unreadable file starts the ledger from zero.
    """

    MAX_ATTEMPTS = 5

    # Points for a win, keyed by the attempt it happened on
    SCORE_TABLE = {1: 200, 2: 150, 3: 100, 4: 50, 5: 0}

    def __init__(self, path=DEFAULT_LEDGER_PATH, autoload: bool = True):
        self.path = Path(path) if path is not None else None
        self._reset_fields()
        if autoload:
            self.load()

    def _reset_fields(self) -> None:
        self.total_score = 0
        self.games_played = 0
        self.games_won = 0
        self.attempt_distribution: Dict[int, int] = {
            attempt: 0 for attempt in range(1, self.MAX_ATTEMPTS + 1)
        }

    @classmethod
    def score_for_attempt(cls, attempt_number: int) -> int:
        """Points for a win on the given attempt (0 outside the table)."""
        return cls.SCORE_TABLE.get(attempt_number, 0)

    @property
    def win_percentage(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played * 100

    def record_result(self, won: bool, attempt_number: int) -> int:
        """Record a finished round and persist the ledger.

        Returns:
            Points added to the total score
        """
        self.games_played += 1
        points = 0

        if won:
            self.games_won += 1
            points = self.score_for_attempt(attempt_number)
            self.total_score += points
            if attempt_number in self.attempt_distribution:
                self.attempt_distribution[attempt_number] += 1
            logger.info(f"Game won on attempt {attempt_number} with score {points}")
        else:
            logger.info(f"Game lost after {attempt_number} attempts")

        self.persist()
        return points

    def reset(self) -> None:
        """Zero all statistics and persist."""
        self._reset_fields()
        logger.info("Score ledger reset")
        self.persist()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_score": self.total_score,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "attempt_distribution": {
                str(attempt): count for attempt, count in sorted(self.attempt_distribution.items())
            },
        }

    def _apply_dict(self, data: Dict[str, Any]) -> None:
        """Validate a persisted record and copy it into this ledger.

        Raises:
            ValueError: If any field is missing, negative or inconsistent
        """
        if not isinstance(data, dict):
            raise ValueError("Ledger record must be a JSON object")

        total_score = int(data["total_score"])
        games_played = int(data["games_played"])
        games_won = int(data["games_won"])
        raw_distribution = data.get("attempt_distribution") or {}
        if not isinstance(raw_distribution, dict):
            raise ValueError("attempt_distribution must be a mapping")

        if min(total_score, games_played, games_won) < 0:
            raise ValueError("Ledger counters cannot be negative")
        if games_won > games_played:
            raise ValueError("games_won cannot exceed games_played")

        distribution = {attempt: 0 for attempt in range(1, self.MAX_ATTEMPTS + 1)}
        for attempt, count in raw_distribution.items():
            attempt, count = int(attempt), int(count)
            if attempt in distribution:
                if count < 0:
                    raise ValueError("Attempt distribution counts cannot be negative")
                distribution[attempt] = count

        self.total_score = total_score
        self.games_played = games_played
        self.games_won = games_won
        self.attempt_distribution = distribution

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path=None) -> "ScoreLedger":
        ledger = cls(path=path, autoload=False)
        ledger._apply_dict(data)
        return ledger

    def load(self) -> None:
        """Load the ledger from disk, starting fresh on any problem."""
        if self.path is None:
            return

        if not self.path.exists():
            logger.info(f"No score file found at {self.path}. Starting with fresh scores.")
            self._reset_fields()
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._apply_dict(data)
            logger.info(f"Scores loaded from {self.path}")
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Score file {self.path} is unreadable ({e}). Starting with fresh scores.")
            self._reset_fields()

    def persist(self) -> bool:
        """Write the ledger atomically. Returns False if the write failed."""
        if self.path is None:
            return False

        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, prefix=".scores-", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                json.dump(self.to_dict(), f, indent=2)
            os.replace(tmp_name, self.path)
            logger.debug(f"Scores saved to {self.path}")
            return True
        except OSError as e:
            logger.error(f"Error saving scores to {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
