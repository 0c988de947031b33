"""Interactive console session for Decryption."""

import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from decryption.game_engine import GameEngine, GuessResult
from decryption.round_state import RoundSnapshot
from decryption.score_ledger import ScoreLedger
from decryption.word_catalog import PLACEHOLDER

console = Console()
logger = logging.getLogger(__name__)


class DecryptionGame:
    """Terminal front end for a GameEngine.

    Renders each snapshot the engine pushes and turns player input into
    ``select_word`` / ``request_new_round`` calls:
    - an option number (1-8) or the word itself makes a guess
    - ``n`` / ``new`` starts a new round
    - ``s`` / ``stats`` shows lifetime statistics
    - ``q`` / ``quit`` ends the session
    """

    NEW_ROUND_COMMANDS = {"n", "new"}
    STATS_COMMANDS = {"s", "stats"}
    QUIT_COMMANDS = {"q", "quit", "exit"}

    def __init__(self, engine: GameEngine, quiet: bool = False, out: Optional[Console] = None):
        self.engine = engine
        self.quiet = quiet
        self.console = out if out is not None else console

        self.session_id = str(uuid.uuid4())[:8]
        self.rounds_played = 0
        self.rounds_won = 0
        self.session_score = 0
        self.start_time: Optional[float] = None

        self.engine.set_listener(self.on_state_change)

    def _print(self, *args, **kwargs):
        """Print to console unless in quiet mode."""
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def on_state_change(self, snapshot: RoundSnapshot) -> None:
        """Engine listener: redraw the board and tally finished rounds."""
        if snapshot.over:
            self.rounds_played += 1
            if snapshot.won:
                self.rounds_won += 1
                self.session_score += snapshot.score
        self.display_round(snapshot)

    def display_round(self, snapshot: RoundSnapshot) -> None:
        self._print(self.render_round(snapshot))

    def render_round(self, snapshot: RoundSnapshot) -> Table:
        """Build the options/attempts table for a snapshot."""
        table = Table(
            title=f"Decryption - {snapshot.word_length} letters",
            caption=f"Attempts: {snapshot.attempt_count}/{snapshot.max_attempts}",
        )
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Option", justify="center", min_width=16)
        table.add_column("Matches", justify="center")

        feedback = dict(zip(snapshot.attempted_words, snapshot.feedback_scores))
        for index, word in enumerate(snapshot.options, start=1):
            if word == PLACEHOLDER:
                table.add_row(str(index), "[dim]-[/dim]", "")
                continue

            if snapshot.over and word == snapshot.target:
                label = f"[bold green]{word}[/bold green]"
            elif word in feedback:
                label = f"[dim]{word}[/dim]"
            else:
                label = word

            matches = f"{feedback[word]}/{len(word)}" if word in feedback else ""
            table.add_row(str(index), label, matches)

        return table

    def display_feedback(self, result: GuessResult, snapshot: Optional[RoundSnapshot]) -> None:
        if not result.accepted:
            self._print(f"[red]{result.message}[/red]")
            return

        if result.correct:
            self._print(f"[bold green]{result.message}[/bold green] You scored {snapshot.score} points.")
        else:
            self._print(f"[yellow]{result.message}[/yellow]")
            if snapshot is not None and snapshot.over:
                self._print(f"[red]Out of attempts.[/red] The word was [bold]{snapshot.target}[/bold].")

    def display_stats(self, ledger: Optional[ScoreLedger] = None) -> None:
        self._print(render_ledger(ledger or self.engine.ledger))

    def resolve_choice(self, raw: str, snapshot: RoundSnapshot) -> str:
        """Map an option number or typed word to the word to submit."""
        choice = raw.strip()
        if choice.isdigit():
            index = int(choice) - 1
            if 0 <= index < len(snapshot.options):
                return snapshot.options[index]
        return choice.upper()

    def handle_input(self, raw: str) -> bool:
        """Process one line of player input. Returns False to quit.

        A word on the current board is always a guess, so a custom word
        such as NEW or QUIT can still be played by name.
        """
        command = raw.strip().lower()
        snapshot = self.engine.snapshot()

        if snapshot is not None and not snapshot.over and command.upper() in snapshot.options:
            self._submit(command.upper())
            return True
        if command in self.QUIT_COMMANDS:
            return False
        if command in self.NEW_ROUND_COMMANDS:
            self.engine.request_new_round()
            return True
        if command in self.STATS_COMMANDS:
            self.display_stats()
            return True
        if not command:
            return True

        if snapshot is None:
            self.engine.request_new_round()
            return True

        self._submit(self.resolve_choice(raw, snapshot))
        return True

    def _submit(self, word: str) -> None:
        logger.info(f"Player selected word: {word}")
        result = self.engine.select_word(word)
        self.display_feedback(result, self.engine.snapshot())

    def _prompt(self) -> str:
        snapshot = self.engine.snapshot()
        if snapshot is not None and snapshot.over:
            return "Round over - (n)ew round, (s)tats or (q)uit: "
        return "Pick a word (1-8 or the word), (n)ew, (s)tats, (q)uit: "

    def play(self, inputs: Optional[List[str]] = None) -> Dict[str, Any]:
        """Run the session until the player quits or inputs run out.

        Args:
            inputs: Scripted input lines; reads from the console when None

        Returns:
            Session summary
        """
        self.start_time = time.time()
        logger.info(f"Starting Decryption session {self.session_id}")

        self._print("[bold]Decryption - Word Logic Game[/bold]")
        self._print("Find the hidden word. Each guess tells you how many letters are in the right place.")
        self.engine.start_round()

        scripted = iter(inputs) if inputs is not None else None
        while True:
            if scripted is not None:
                line = next(scripted, None)
                if line is None:
                    break
            else:
                try:
                    line = self.console.input(self._prompt())
                except (EOFError, KeyboardInterrupt):
                    self._print("")
                    break

            if not self.handle_input(line):
                break

        duration = time.time() - self.start_time
        summary = {
            "session_id": self.session_id,
            "rounds_played": self.rounds_played,
            "rounds_won": self.rounds_won,
            "session_score": self.session_score,
            "duration": duration,
        }
        logger.info(
            f"Session {self.session_id} ended: {self.rounds_won}/{self.rounds_played} won, "
            f"{self.session_score} points"
        )
        self._print(
            f"\n[bold]Session over.[/bold] Won {self.rounds_won}/{self.rounds_played} rounds "
            f"for {self.session_score} points."
        )
        return summary


def render_ledger(ledger: ScoreLedger) -> Table:
    """Lifetime statistics as a rich table."""
    table = Table(title="Decryption Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Total score", str(ledger.total_score))
    table.add_row("Games played", str(ledger.games_played))
    table.add_row("Games won", str(ledger.games_won))
    table.add_row("Win rate", f"{ledger.win_percentage:.1f}%")

    for attempt, count in sorted(ledger.attempt_distribution.items()):
        table.add_row(f"Won on attempt {attempt}", str(count))

    return table
