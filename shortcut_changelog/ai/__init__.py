"""AI processing module for changelog generation."""

from .agents import changelog_agent
from .changelog import (
    ChangelogGenerationError,
    format_stories_prompt,
    format_story,
    generate_changelog,
)
from .prompts import CHANGELOG_PROMPT

__all__ = [
    # Agents
    "changelog_agent",
    # Generation
    "ChangelogGenerationError",
    "generate_changelog",
    "format_stories_prompt",
    "format_story",
    # Prompts
    "CHANGELOG_PROMPT",
]
