"""Decryption: a single-player word deduction game.

The player picks from 8 same-length words. Each guess reports how many
letter positions match the hidden target word:
- 5 attempts per round
- Scoring by attempt of the win: 200, 150, 100, 50, 0
- Lifetime statistics persisted between sessions
"""

__version__ = "1.0.0"

from decryption.errors import DecryptionError, EmptyCorpusError
from decryption.game_engine import GameEngine, GuessResult
from decryption.round_state import RoundSnapshot, RoundState, RoundStatus
from decryption.score_ledger import ScoreLedger
from decryption.word_catalog import WordCatalog

__all__ = [
    "DecryptionError",
    "EmptyCorpusError",
    "GameEngine",
    "GuessResult",
    "RoundSnapshot",
    "RoundState",
    "RoundStatus",
    "ScoreLedger",
    "WordCatalog",
]
