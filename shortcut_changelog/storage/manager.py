"""Storage manager for generated changelogs."""

import json
import re
from pathlib import Path

from rich.console import Console

from ..shortcut_client.models import ChangelogData

console = Console()


class StorageManager:
    """Manages storage of generated changelogs as Markdown and JSON files."""

    def __init__(self, base_path: str = "data/changelogs"):
        """Initialize storage manager.

        Args:
            base_path: Base directory for storing changelog files
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _generate_slug(self, changelog: ChangelogData) -> str:
        """Generate a filesystem-safe name from title and generation time."""
        title = re.sub(r"[^a-z0-9]+", "-", changelog.title.lower()).strip("-")
        stamp = changelog.generated_at.strftime("%Y%m%d_%H%M%S")
        return f"{title or 'changelog'}_{stamp}"

    def save_changelog(self, changelog: ChangelogData) -> Path:
        """Save a changelog as ``<slug>.md`` plus ``<slug>.json``.

        Returns:
            Path to the Markdown file
        """
        slug = self._generate_slug(changelog)
        markdown_path = self.base_path / f"{slug}.md"
        json_path = self.base_path / f"{slug}.json"

        try:
            markdown_path.write_text(changelog.content, encoding="utf-8")
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump(
                    changelog.model_dump(mode="json"),
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
        except OSError as e:
            console.print(f"Error saving changelog '{changelog.title}': {e}")
            raise

        console.print(f"Saved changelog to {markdown_path}")
        return markdown_path

    def load_changelog(self, path: Path) -> ChangelogData | None:
        """Load a changelog from its JSON file, or None if unreadable."""
        json_path = path.with_suffix(".json")
        if not json_path.exists():
            return None

        try:
            with open(json_path, encoding="utf-8") as f:
                return ChangelogData.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            console.print(f"Error loading {json_path}: {e}")
            return None

    def list_changelogs(self) -> list[Path]:
        """List saved changelog Markdown files, newest first."""
        return sorted(
            self.base_path.glob("*.md"), key=lambda p: p.stat().st_mtime, reverse=True
        )
