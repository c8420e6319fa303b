"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

# Period selection
WEEK_OPTION = typer.Option(
    0,
    "--week",
    "-w",
    help="Week to report on: 0 is this week, 1 last week, and so on",
    rich_help_panel="Period Selection",
)

START_OPTION = typer.Option(
    None,
    "--start",
    help="Custom start date (e.g. 2024-01-01); overrides --week",
    rich_help_panel="Period Selection",
)

END_OPTION = typer.Option(
    None,
    "--end",
    help="Custom end date (e.g. 2024-01-07); required with --start",
    rich_help_panel="Period Selection",
)

# Credentials
TOKEN_OPTION = typer.Option(
    None, "--token", help="Shortcut API token (defaults to SHORTCUT_TOKEN env var)"
)

API_KEY_OPTION = typer.Option(
    None,
    "--api-key",
    help="Gemini API key (defaults to GEMINI_API_KEY env var)",
    rich_help_panel="AI Configuration",
)

# AI configuration
MODEL_OPTION = typer.Option(
    None,
    "--model",
    "-m",
    help="Gemini model to use (defaults to CHANGELOG_MODEL or gemini-flash-latest)",
    rich_help_panel="AI Configuration",
)

LANGUAGE_OPTION = typer.Option(
    "Spanish",
    "--language",
    help="Language the changelog is written in",
    rich_help_panel="AI Configuration",
)

# Output
JSON_OPTION = typer.Option(False, "--json", help="Print stories as JSON")

SAVE_OPTION = typer.Option(
    False, "--save", "-s", help="Save the changelog as Markdown and JSON"
)

OUTPUT_DIR_OPTION = typer.Option(
    "data/changelogs", "--output-dir", help="Directory for saved changelogs"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")
