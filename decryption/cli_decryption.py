"""CLI subcommands for the Decryption game, registered on the root app in cli.py."""

import logging
import random
from datetime import date
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from decryption.config import GameSettings, load_settings
from decryption.errors import EmptyCorpusError
from decryption.game import DecryptionGame, render_ledger
from decryption.game_engine import GameEngine
from decryption.score_ledger import ScoreLedger
from decryption.word_catalog import DirectoryWordSource, WordCatalog, load_word_file
from shared.utils.logging import setup_logging

console = Console()


def _daily_seed(today: Optional[date] = None) -> int:
    """Seed shared by every run on the same calendar day."""
    return (today or date.today()).toordinal()


def _build_catalog(settings: GameSettings, custom_words: Optional[Path] = None) -> WordCatalog:
    """Create the word catalog or exit with an error."""
    rng = random.Random(settings.seed)
    try:
        catalog = WordCatalog(DirectoryWordSource(settings.words_dir), rng=rng)
    except EmptyCorpusError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print(f"[yellow]Checked word lists in {settings.words_dir}[/yellow]")
        raise typer.Exit(1)

    if custom_words is not None:
        try:
            added = catalog.add_custom_words(load_word_file(custom_words))
        except (OSError, ValueError, yaml.YAMLError) as e:
            console.print(f"[red]Error reading custom words: {e}[/red]")
            raise typer.Exit(1)
        console.print(f"[dim]Added {added} custom words[/dim]")

    return catalog


def play(
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible rounds"),
    daily: bool = typer.Option(False, "--daily", help="Use today's date as the random seed"),
    words_dir: Optional[Path] = typer.Option(None, help="Directory of length_<n>.yaml word lists"),
    custom_words: Optional[Path] = typer.Option(None, help="Extra words file (YAML or one word per line)"),
    ledger: Optional[Path] = typer.Option(None, help="Path to the statistics file"),
    log_path: Optional[Path] = typer.Option(None, help="Directory for log files"),
    config: Optional[Path] = typer.Option(None, help="Settings YAML file"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Play Decryption interactively.

    Each round offers 8 words of the same length. Pick one and you learn
    how many letters sit in the right place. You have 5 attempts.

    Scoring by the attempt you win on: 200, 150, 100, 50, 0.
    """
    if daily and seed is None:
        seed = _daily_seed()

    settings = load_settings(config).with_overrides(
        seed=seed, words_dir=words_dir, ledger_path=ledger, log_dir=log_path
    )

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(settings.log_dir, verbose)
    logger = logging.getLogger(__name__)

    if settings.seed is not None:
        logger.info(f"Random seed set to: {settings.seed}")

    catalog = _build_catalog(settings, custom_words)
    score_ledger = ScoreLedger(settings.ledger_path)
    engine = GameEngine(catalog, score_ledger)

    game = DecryptionGame(engine)
    summary = game.play()

    if summary["rounds_played"]:
        game.display_stats()


def stats(
    ledger: Optional[Path] = typer.Option(None, help="Path to the statistics file"),
    config: Optional[Path] = typer.Option(None, help="Settings YAML file"),
):
    """Show lifetime statistics."""
    settings = load_settings(config).with_overrides(ledger_path=ledger)
    console.print(render_ledger(ScoreLedger(settings.ledger_path)))


def reset_stats(
    ledger: Optional[Path] = typer.Option(None, help="Path to the statistics file"),
    config: Optional[Path] = typer.Option(None, help="Settings YAML file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Reset lifetime statistics to zero."""
    settings = load_settings(config).with_overrides(ledger_path=ledger)

    if not yes:
        typer.confirm(f"Reset all statistics in {settings.ledger_path}?", abort=True)

    score_ledger = ScoreLedger(settings.ledger_path)
    score_ledger.reset()
    console.print("[green]Statistics reset[/green]")


def words(
    words_dir: Optional[Path] = typer.Option(None, help="Directory of length_<n>.yaml word lists"),
    config: Optional[Path] = typer.Option(None, help="Settings YAML file"),
):
    """Show how many words are available for each length."""
    settings = load_settings(config).with_overrides(words_dir=words_dir)
    catalog = _build_catalog(settings)

    table = Table(title=f"Word lists in {settings.words_dir}")
    table.add_column("Length", justify="right", style="cyan")
    table.add_column("Words", justify="right", style="green")
    table.add_column("Playable", justify="center")

    for length, size in catalog.bucket_sizes().items():
        playable = "yes" if size >= WordCatalog.OPTIONS_PER_ROUND else "[yellow]padded[/yellow]"
        table.add_row(str(length), str(size), playable)

    console.print(table)
    console.print(f"Total: {len(catalog)} words")
