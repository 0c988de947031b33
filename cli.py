"""Command-line interface for Decryption - a word logic game.

This is the unified CLI entry point:
- `decryption play` - Play interactively
- `decryption stats` - Show lifetime statistics
- `decryption reset-stats` - Zero the statistics
- `decryption words` - Inspect the word lists
"""

import typer
from rich.console import Console

from decryption.cli_decryption import play, reset_stats, stats, words

# Main application
app = typer.Typer(
    help="Decryption - find the hidden word from positional letter matches",
    no_args_is_help=True,
)
console = Console()

# Register game commands
app.command()(play)
app.command()(stats)
app.command(name="reset-stats")(reset_stats)
app.command()(words)


@app.callback()
def main():
    """Decryption - Word Logic Game.

    Pick one of 8 words; each guess tells you how many letters are in the
    right position. Find the target in 5 attempts.

    Examples:

        # Play a session
        decryption play

        # Everyone gets the same rounds today
        decryption play --daily

        # Check lifetime statistics
        decryption stats
    """
    pass


@app.command()
def version():
    """Show version information."""
    from decryption import __version__ as decryption_version
    from shared import __version__ as shared_version

    console.print("[bold]Decryption[/bold]")
    console.print(f"  decryption: {decryption_version}")
    console.print(f"  shared: {shared_version}")


if __name__ == "__main__":
    app()
