"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .report import generate, history, stories, weeks

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="shortcut-changelog",
    help="Weekly changelog generation from completed Shortcut stories",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="weeks", context_settings={"help_option_names": ["-h", "--help"]})(
    weeks
)
app.command(name="stories", context_settings={"help_option_names": ["-h", "--help"]})(
    stories
)
app.command(
    name="generate", context_settings={"help_option_names": ["-h", "--help"]}
)(generate)
app.command(name="history", context_settings={"help_option_names": ["-h", "--help"]})(
    history
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from shortcut_changelog import __version__

    console.print(f"Shortcut Changelog v{__version__}")


if __name__ == "__main__":
    app()
