"""Word corpus and round generation for Decryption.

Words are grouped into buckets by length so that every round offers
options of a single length, which keeps positional feedback meaningful.

Usage:
    catalog = WordCatalog(DirectoryWordSource(DEFAULT_WORDS_DIR))
    options = catalog.generate_round()
    target = catalog.select_target(options)
"""

import logging
import random
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import yaml

from decryption.errors import EmptyCorpusError

logger = logging.getLogger(__name__)

# Packaged corpus, one file per word length
DEFAULT_WORDS_DIR = Path(__file__).parent / "inputs" / "words"

# Pads a round when the chosen bucket holds fewer than OPTIONS_PER_ROUND words
PLACEHOLDER = "-"


def normalize_word(word) -> str:
    """Trim and uppercase a raw word (non-strings become empty)."""
    if not isinstance(word, str):
        return ""
    return word.strip().upper()


def is_valid_entry(word: str) -> bool:
    """True if word is an uppercase alphabetic string of a playable length."""
    return (
        word.isalpha()
        and word.isupper()
        and WordCatalog.MIN_WORD_LENGTH <= len(word) <= WordCatalog.MAX_WORD_LENGTH
    )


def _words_from_yaml(data) -> List[str]:
    """Accept either a bare list or a mapping with a ``words`` key."""
    if isinstance(data, dict):
        data = data.get("words")
    return data if isinstance(data, list) else []


def load_word_file(path) -> List[str]:
    """Read a custom word file.

    YAML files (``.yaml``/``.yml``) hold a ``words:`` list or a bare list.
    Anything else is read as plain text, one word per line.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return _words_from_yaml(yaml.safe_load(f))
        return f.read().splitlines()


class MappingWordSource:
    """In-memory word source keyed by word length."""

    def __init__(self, words_by_length: Mapping[int, Sequence[str]]):
        self._words = {int(length): list(words) for length, words in words_by_length.items()}

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "MappingWordSource":
        """Group a flat word list by length."""
        grouped: Dict[int, List[str]] = {}
        for word in words:
            grouped.setdefault(len(normalize_word(word)), []).append(word)
        return cls(grouped)

    def load_words_for_length(self, length: int) -> Optional[List[str]]:
        words = self._words.get(length)
        return list(words) if words is not None else None


class DirectoryWordSource:
    """Word source reading one file per length from a directory.

    Looks for ``length_<n>.yaml`` (a ``words:`` list) first and falls back
    to ``length_<n>.txt`` (one word per line).
    """

    def __init__(self, words_dir=DEFAULT_WORDS_DIR):
        self.words_dir = Path(words_dir)

    def _find_file(self, length: int) -> Optional[Path]:
        for suffix in (".yaml", ".yml", ".txt"):
            candidate = self.words_dir / f"length_{length}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def load_words_for_length(self, length: int) -> Optional[List[str]]:
        word_file = self._find_file(length)
        if word_file is None:
            logger.debug(f"No word file for length {length} in {self.words_dir}")
            return None

        try:
            return load_word_file(word_file)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Could not read word file {word_file}: {e}")
            return None


class WordCatalog:
    """Owns the word corpus and produces round options and targets."""

    OPTIONS_PER_ROUND = 8
    MIN_WORD_LENGTH = 3
    MAX_WORD_LENGTH = 14

    def __init__(self, source=None, rng: Optional[random.Random] = None):
        """Initialize the catalog and load the corpus.

        Args:
            source: Object with ``load_words_for_length(n)``; defaults to the
                packaged word lists
            rng: Random source for bucket choice, shuffling and target picks

        Raises:
            EmptyCorpusError: If no usable word is found for any length
        """
        self.source = source if source is not None else DirectoryWordSource()
        self.rng = rng if rng is not None else random.Random()

        self._words: List[str] = []
        self._buckets: Dict[int, List[str]] = {}

        self.load_corpus()

    def load_corpus(self) -> None:
        """(Re)load every length bucket from the word source."""
        self._words = []
        self._buckets = {}

        for length in range(self.MIN_WORD_LENGTH, self.MAX_WORD_LENGTH + 1):
            raw_words = self.source.load_words_for_length(length)
            if raw_words is None:
                continue
            added = self._insert_all(raw_words)
            logger.debug(f"Loaded {added} words of length {length}")

        if not self._words:
            raise EmptyCorpusError(
                f"No usable words of length {self.MIN_WORD_LENGTH}-{self.MAX_WORD_LENGTH} found"
            )

        logger.info(f"Loaded {len(self._words)} words across {len(self._buckets)} lengths")

    def _insert(self, raw_word) -> bool:
        word = normalize_word(raw_word)
        if not word:
            return False
        if not is_valid_entry(word):
            logger.debug(f"Skipping invalid word: {word!r}")
            return False

        bucket = self._buckets.setdefault(len(word), [])
        if word in bucket:
            return False

        bucket.append(word)
        self._words.append(word)
        return True

    def _insert_all(self, raw_words: Iterable) -> int:
        return sum(1 for raw_word in raw_words if self._insert(raw_word))

    def add_custom_words(self, words: Optional[Iterable[str]]) -> int:
        """Add words to the corpus, ignoring duplicates and invalid entries.

        Returns:
            Number of words actually added
        """
        if not words:
            return 0

        added = self._insert_all(words)
        if added:
            logger.info(f"Added {added} custom words to the word list")
        return added

    @property
    def words(self) -> List[str]:
        return list(self._words)

    @property
    def lengths(self) -> List[int]:
        """Word lengths that have at least one entry."""
        return sorted(length for length, bucket in self._buckets.items() if bucket)

    def bucket(self, length: int) -> List[str]:
        return list(self._buckets.get(length, []))

    def bucket_sizes(self) -> Dict[int, int]:
        return {length: len(self._buckets[length]) for length in self.lengths}

    def __len__(self) -> int:
        return len(self._words)

    def generate_round(self) -> List[str]:
        """Pick a length bucket and return 8 distinct words from it.

        Short buckets are padded with PLACEHOLDER so the result always has
        exactly OPTIONS_PER_ROUND entries.
        """
        length = self.rng.choice(self.lengths)
        candidates = self.bucket(length)
        self.rng.shuffle(candidates)

        options = candidates[:self.OPTIONS_PER_ROUND]
        if len(options) < self.OPTIONS_PER_ROUND:
            logger.warning(
                f"Only {len(options)} words of length {length}, padding round with placeholders"
            )
            options += [PLACEHOLDER] * (self.OPTIONS_PER_ROUND - len(options))

        return options

    def select_target(self, options: Sequence[str]) -> str:
        """Pick the target uniformly from the real words among options."""
        if not options:
            return PLACEHOLDER

        real_words = [word for word in options if word != PLACEHOLDER]
        return self.rng.choice(real_words or list(options))
