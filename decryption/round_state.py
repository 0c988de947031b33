"""Per-round state for Decryption."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class RoundStatus(Enum):
    """Lifecycle of a round as seen by the engine."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


def count_matches(guess: str, target: str) -> int:
    """Number of positions where guess and target share the same letter."""
    return sum(1 for g, t in zip(guess, target) if g == t)


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of a round handed to the presentation layer.

    ``target`` is only filled in once the round is over.
    """
    options: Tuple[str, ...]
    attempt_count: int
    max_attempts: int
    attempted_words: Tuple[str, ...]
    feedback_scores: Tuple[int, ...]
    won: bool
    over: bool
    score: int
    status: RoundStatus
    target: Optional[str] = None

    @property
    def remaining_attempts(self) -> int:
        return self.max_attempts - self.attempt_count

    @property
    def word_length(self) -> int:
        return len(self.options[0]) if self.options else 0


@dataclass
class RoundState:
    """Mutable record of one round. A new instance is created per round."""
    options: Tuple[str, ...]
    target: str
    max_attempts: int = 5
    attempt_count: int = 0
    attempted_words: List[str] = field(default_factory=list)
    feedback_scores: List[int] = field(default_factory=list)
    score: int = 0
    won: bool = False
    over: bool = False

    def __post_init__(self):
        self.options = tuple(self.options)
        if self.target not in self.options:
            raise ValueError(f"Target {self.target!r} is not one of the round options")

    @property
    def remaining_attempts(self) -> int:
        return self.max_attempts - self.attempt_count

    @property
    def status(self) -> RoundStatus:
        if self.won:
            return RoundStatus.WON
        if self.over:
            return RoundStatus.LOST
        return RoundStatus.IN_PROGRESS

    def record_attempt(self, word: str) -> int:
        """Append a guess and its match count; returns the match count."""
        match_count = count_matches(word, self.target)
        self.attempt_count += 1
        self.attempted_words.append(word)
        self.feedback_scores.append(match_count)
        return match_count

    def mark_won(self, score: int) -> None:
        self.won = True
        self.over = True
        self.score = score

    def mark_lost(self) -> None:
        self.over = True

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            options=self.options,
            attempt_count=self.attempt_count,
            max_attempts=self.max_attempts,
            attempted_words=tuple(self.attempted_words),
            feedback_scores=tuple(self.feedback_scores),
            won=self.won,
            over=self.over,
            score=self.score,
            status=self.status,
            target=self.target if self.over else None,
        )
