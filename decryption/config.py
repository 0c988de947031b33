"""Settings for the Decryption CLI.

Resolution order (later wins):
1. Built-in defaults
2. YAML settings file (``decryption.yaml`` or ``$DECRYPTION_CONFIG``)
3. ``DECRYPTION_*`` environment variables
4. Explicit CLI options (applied by the caller)
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import yaml

from decryption.score_ledger import DEFAULT_LEDGER_PATH
from decryption.word_catalog import DEFAULT_WORDS_DIR

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "decryption.yaml"


@dataclass
class GameSettings:
    words_dir: Path = field(default_factory=lambda: DEFAULT_WORDS_DIR)
    ledger_path: Path = field(default_factory=lambda: DEFAULT_LEDGER_PATH)
    log_dir: Path = field(default_factory=lambda: Path("logs/decryption"))
    seed: Optional[int] = None

    def with_overrides(self, **overrides) -> "GameSettings":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        for key in ("words_dir", "ledger_path", "log_dir"):
            if key in changes:
                changes[key] = Path(changes[key]).expanduser()
        return replace(self, **changes)


_ENV_OVERRIDES = {
    "DECRYPTION_WORDS_DIR": "words_dir",
    "DECRYPTION_LEDGER_PATH": "ledger_path",
    "DECRYPTION_LOG_DIR": "log_dir",
    "DECRYPTION_SEED": "seed",
}


def _read_settings_file(config_path: Path) -> dict:
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read settings file {config_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {config_path}: expected a mapping")
        return {}
    return data


def _coerce_seed(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-integer seed: {value!r}")
        return None


def load_settings(config_path=None) -> GameSettings:
    """Build settings from defaults, settings file and environment."""
    if config_path is None:
        config_path = os.getenv("DECRYPTION_CONFIG", DEFAULT_CONFIG_FILE)

    file_values = _read_settings_file(Path(config_path))
    known = {key: file_values[key] for key in ("words_dir", "ledger_path", "log_dir", "seed") if key in file_values}

    for env_var, key in _ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            known[key] = value

    if "seed" in known:
        known["seed"] = _coerce_seed(known["seed"])

    return GameSettings().with_overrides(**known)
