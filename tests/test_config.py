"""Tests for settings resolution."""

import tempfile
from pathlib import Path
from unittest.mock import patch

from decryption.config import GameSettings, load_settings
from decryption.score_ledger import DEFAULT_LEDGER_PATH
from decryption.word_catalog import DEFAULT_WORDS_DIR


class TestLoadSettings:
    """Test cases for load_settings."""

    def setup_method(self):
        """Setup for each test."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_file = self.temp_dir / "decryption.yaml"

    def test_defaults_without_file(self):
        """Test defaults apply when no settings file exists."""
        with patch.dict("os.environ", {}, clear=True):
            settings = load_settings(self.config_file)

        assert settings.words_dir == DEFAULT_WORDS_DIR
        assert settings.ledger_path == DEFAULT_LEDGER_PATH
        assert settings.seed is None

    def test_values_from_file(self):
        """Test the YAML settings file is read."""
        self.config_file.write_text(
            f"words_dir: {self.temp_dir / 'words'}\nledger_path: {self.temp_dir / 'scores.json'}\nseed: 7\n"
        )
        with patch.dict("os.environ", {}, clear=True):
            settings = load_settings(self.config_file)

        assert settings.words_dir == self.temp_dir / "words"
        assert settings.ledger_path == self.temp_dir / "scores.json"
        assert settings.seed == 7

    def test_environment_overrides_file(self):
        """Test DECRYPTION_* variables win over the file."""
        self.config_file.write_text("seed: 7\n")
        env = {"DECRYPTION_SEED": "11", "DECRYPTION_LOG_DIR": str(self.temp_dir / "logs")}
        with patch.dict("os.environ", env, clear=True):
            settings = load_settings(self.config_file)

        assert settings.seed == 11
        assert settings.log_dir == self.temp_dir / "logs"

    def test_config_path_from_environment(self):
        """Test DECRYPTION_CONFIG selects the settings file."""
        self.config_file.write_text("seed: 3\n")
        with patch.dict("os.environ", {"DECRYPTION_CONFIG": str(self.config_file)}, clear=True):
            settings = load_settings()

        assert settings.seed == 3

    def test_invalid_file_ignored(self):
        """Test malformed settings fall back to defaults."""
        self.config_file.write_text("- just\n- a list\n")
        with patch.dict("os.environ", {}, clear=True):
            settings = load_settings(self.config_file)

        assert settings == GameSettings()

    def test_bad_seed_ignored(self):
        """Test a non-integer seed is dropped."""
        with patch.dict("os.environ", {"DECRYPTION_SEED": "tomorrow"}, clear=True):
            settings = load_settings(self.config_file)

        assert settings.seed is None


class TestGameSettingsOverrides:
    """Test cases for CLI overrides."""

    def test_none_overrides_are_ignored(self):
        settings = GameSettings(seed=5)
        assert settings.with_overrides(seed=None, words_dir=None) == settings

    def test_paths_are_coerced(self):
        settings = GameSettings().with_overrides(ledger_path="scores.json", seed=1)
        assert settings.ledger_path == Path("scores.json")
        assert settings.seed == 1
