"""CLI commands for collecting stories and generating changelogs."""

import asyncio
import json
import logging
from datetime import datetime

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.table import Table

from ..ai.changelog import ChangelogGenerationError, generate_changelog
from ..config import ChangelogConfig
from ..shortcut_client.aggregator import TrackerAggregator
from ..shortcut_client.client import ShortcutAPIError, ShortcutClient
from ..shortcut_client.models import ChangelogData, EnrichedStory, WeekRange
from ..storage.manager import StorageManager
from ..utils.date_parser import custom_range, parse_date_input, week_options
from .options import (
    API_KEY_OPTION,
    END_OPTION,
    JSON_OPTION,
    LANGUAGE_OPTION,
    MODEL_OPTION,
    OUTPUT_DIR_OPTION,
    SAVE_OPTION,
    START_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
    WEEK_OPTION,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def resolve_period(week: int, start: str | None, end: str | None) -> WeekRange:
    """Turn CLI period options into a WeekRange.

    Raises:
        ValueError: If the options are invalid
    """
    if start or end:
        if not (start and end):
            raise ValueError("--start and --end must be used together")
        return custom_range(parse_date_input(start), parse_date_input(end))

    if week < 0:
        raise ValueError("--week must be zero or a positive integer")
    return week_options(count=week + 1)[week]


async def fetch_stories(
    config: ChangelogConfig, period: WeekRange
) -> list[EnrichedStory]:
    """Run one aggregation for the given period."""
    async with ShortcutClient(
        token=config.shortcut_token, base_url=config.api_url
    ) as client:
        aggregator = TrackerAggregator(client)
        return await aggregator.get_completed_stories(period.start, period.end)


def show_stories_table(stories: list[EnrichedStory], title: str) -> None:
    """Print enriched stories as a table."""
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Team", style="green")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Epic", style="magenta")
    table.add_column("Owners")
    table.add_column("Status")

    for story in stories:
        table.add_row(
            str(story.id),
            story.team_name,
            story.story_type or "-",
            story.name,
            story.epic_name or "-",
            ", ".join(story.owner_names) if story.owner_names else "-",
            "[yellow]partial[/yellow]" if story.is_partial else "done",
        )

    console.print(table)


def weeks(
    count: int = typer.Option(5, "--count", "-c", help="Number of weeks to list"),
) -> None:
    """List the selectable reporting weeks."""
    try:
        options = week_options(count=count)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Reporting Weeks")
    table.add_column("Week", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Start")
    table.add_column("End")
    for index, option in enumerate(options):
        table.add_row(
            str(index),
            option.label,
            option.start.strftime("%Y-%m-%d"),
            option.end.strftime("%Y-%m-%d"),
        )
    console.print(table)


def stories(
    week: int = WEEK_OPTION,
    start: str | None = START_OPTION,
    end: str | None = END_OPTION,
    token: str | None = TOKEN_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show completed stories for a period, enriched with team and epic data.

    Examples:
        shortcut-changelog stories --week 1
        shortcut-changelog stories --start 2024-01-01 --end 2024-01-07 --json
    """
    configure_logging(verbose)
    try:
        config = ChangelogConfig(shortcut_token=token)
        config.validate(require_gemini=False)
        period = resolve_period(week, start, end)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    try:
        found = asyncio.run(fetch_stories(config, period))
    except ShortcutAPIError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([story.to_output() for story in found], indent=2))
        return

    if not found:
        console.print(
            f"[yellow]No stories found for the period: {period.label}[/yellow]"
        )
        return

    show_stories_table(found, f"Completed Stories ({period.label})")
    partial_count = sum(1 for story in found if story.is_partial)
    console.print(
        f"[blue]Found {len(found)} stories ({partial_count} partial)[/blue]"
    )


def generate(
    week: int = WEEK_OPTION,
    start: str | None = START_OPTION,
    end: str | None = END_OPTION,
    token: str | None = TOKEN_OPTION,
    api_key: str | None = API_KEY_OPTION,
    model: str | None = MODEL_OPTION,
    language: str = LANGUAGE_OPTION,
    save: bool = SAVE_OPTION,
    output_dir: str = OUTPUT_DIR_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate a weekly changelog from completed Shortcut stories.

    Examples:
        shortcut-changelog generate
        shortcut-changelog generate --week 1 --language English --save
    """
    configure_logging(verbose)
    try:
        config = ChangelogConfig(
            shortcut_token=token, gemini_api_key=api_key, model=model
        )
        config.validate()
        period = resolve_period(week, start, end)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"🔎 Searching stories ({period.label})...")
    try:
        found = asyncio.run(fetch_stories(config, period))
    except ShortcutAPIError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if not found:
        console.print(
            f"[red]❌ No stories found for the period: {period.label}[/red]"
        )
        raise typer.Exit(1)

    console.print(f"✅ Found {len(found)} stories")
    console.print(f"🤖 {config.model} is analyzing the stories...")
    try:
        content = asyncio.run(
            generate_changelog(
                found,
                config.gemini_api_key,
                model_name=config.model,
                period=(
                    f"{period.label} ({period.start:%Y-%m-%d} to {period.end:%Y-%m-%d})"
                ),
                language=language,
            )
        )
    except ChangelogGenerationError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    console.print(Markdown(content))

    if save:
        changelog = ChangelogData(
            title=f"Changelog {period.label}",
            content=content,
            generated_at=datetime.now(),
        )
        StorageManager(base_path=output_dir).save_changelog(changelog)


def history(
    output_dir: str = OUTPUT_DIR_OPTION,
) -> None:
    """List saved changelogs."""
    storage = StorageManager(base_path=output_dir)
    paths = storage.list_changelogs()
    if not paths:
        console.print("[yellow]No saved changelogs found.[/yellow]")
        return

    table = Table(title="Saved Changelogs")
    table.add_column("Title", style="cyan")
    table.add_column("Generated", style="green")
    table.add_column("File")
    for path in paths:
        changelog = storage.load_changelog(path)
        if changelog is None:
            continue
        table.add_row(
            changelog.title,
            changelog.generated_at.strftime("%Y-%m-%d %H:%M"),
            str(path),
        )
    console.print(table)
