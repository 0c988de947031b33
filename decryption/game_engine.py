"""Core game engine for Decryption.

The engine is the single source of truth for the rules:
- A round offers 8 same-length words, one of which is the target
- Each accepted guess reports how many positions match the target
- The round ends on a correct guess or after MAX_ATTEMPTS guesses
- Wins and losses are recorded in the ScoreLedger

The presentation layer only calls ``request_new_round`` / ``select_word``
and renders the snapshots pushed to its listener.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from decryption.round_state import RoundSnapshot, RoundState, RoundStatus
from decryption.score_ledger import ScoreLedger
from decryption.word_catalog import WordCatalog

logger = logging.getLogger(__name__)

StateListener = Callable[[RoundSnapshot], None]


@dataclass(frozen=True)
class GuessResult:
    """Outcome of a single submitted guess."""
    correct: bool
    match_count: int
    message: str
    accepted: bool = True

    @classmethod
    def rejected(cls, message: str) -> "GuessResult":
        return cls(correct=False, match_count=0, message=message, accepted=False)


class GameEngine:
    """Runs rounds against a WordCatalog and records results in a ScoreLedger."""

    MAX_ATTEMPTS = 5

    MSG_NO_ROUND = "No round in progress"
    MSG_GAME_OVER = "Game already over"
    MSG_NOT_AN_OPTION = "Word not in options"
    MSG_CORRECT = "Correct!"

    def __init__(
        self,
        catalog: WordCatalog,
        ledger: ScoreLedger,
        listener: Optional[StateListener] = None,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self._listener = listener
        self._round: Optional[RoundState] = None

    def set_listener(self, listener: Optional[StateListener]) -> None:
        """Register the callback that receives a snapshot after each change."""
        self._listener = listener

    def _notify(self) -> None:
        if self._listener is not None and self._round is not None:
            self._listener(self._round.snapshot())

    @property
    def status(self) -> RoundStatus:
        if self._round is None:
            return RoundStatus.NOT_STARTED
        return self._round.status

    def snapshot(self) -> Optional[RoundSnapshot]:
        return self._round.snapshot() if self._round is not None else None

    def start_round(self) -> RoundSnapshot:
        """Discard any current round and start a fresh one."""
        options = self.catalog.generate_round()
        target = self.catalog.select_target(options)
        self._round = RoundState(options=options, target=target, max_attempts=self.MAX_ATTEMPTS)

        logger.info(f"New round started with options: {', '.join(options)}")
        logger.debug(f"Target word: {target}")

        self._notify()
        return self._round.snapshot()

    def submit_guess(self, word: str) -> GuessResult:
        """Evaluate a guess against the current round.

        Invalid guesses (no round, round over, word not offered) are
        reported as rejected results and leave all state untouched.
        """
        current = self._round
        if current is None:
            logger.info("Guess submitted before any round was started")
            return GuessResult.rejected(self.MSG_NO_ROUND)

        if current.over:
            logger.info("Game is already over")
            return GuessResult.rejected(self.MSG_GAME_OVER)

        if word not in current.options:
            logger.info(f"Invalid guess: {word!r}")
            return GuessResult.rejected(self.MSG_NOT_AN_OPTION)

        match_count = current.record_attempt(word)
        attempt = current.attempt_count
        correct = word == current.target

        if correct:
            current.mark_won(self.ledger.score_for_attempt(attempt))
            self.ledger.record_result(True, attempt)
            logger.info(f"Player won on attempt {attempt} with score {current.score}")
        elif attempt >= current.max_attempts:
            current.mark_lost()
            self.ledger.record_result(False, attempt)
            logger.info(f"Player lost after {attempt} attempts, target was {current.target}")
        else:
            logger.info(f"Attempt {attempt}: {word} matched {match_count}/{len(current.target)}")

        self._notify()

        if correct:
            message = self.MSG_CORRECT
        else:
            message = f"{match_count}/{len(current.target)} correct characters"
        return GuessResult(correct=correct, match_count=match_count, message=message)

    # Inbound calls from the view

    def request_new_round(self) -> RoundSnapshot:
        return self.start_round()

    def select_word(self, word: str) -> GuessResult:
        return self.submit_guess(word)
