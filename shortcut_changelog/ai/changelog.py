"""Changelog generation from enriched stories."""

import logging
from typing import Any

from pydantic_ai import Agent
from pydantic_ai.models import Model

from ..config import DEFAULT_MODEL
from ..shortcut_client.models import EnrichedStory
from .agents import changelog_agent
from .prompts import CHANGELOG_REQUEST_TEMPLATE

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 150


class ChangelogGenerationError(Exception):
    """Raised when a changelog could not be generated."""


def format_story(story: EnrichedStory) -> str:
    """Render one story as a prompt block."""
    story_type = (story.story_type or "task").upper()
    team = story.team_name or "General"
    name = story.name or "Untitled Story"
    description = (
        story.description[:DESCRIPTION_LIMIT]
        if story.description
        else "No description provided"
    )
    labels = (
        ", ".join(label.name for label in story.labels)
        if story.labels
        else "No labels"
    )
    epic_info = f"\n    Epic: {story.epic_name}" if story.epic_name else ""
    owners = ", ".join(story.owner_names) if story.owner_names else "No owner"
    if story.is_partial:
        status = (
            "STATUS: [PARTIAL] Only part of this initiative has been completed "
            "(e.g. backend or frontend)."
        )
    else:
        status = "STATUS: [COMPLETED] Task fully finished."

    return (
        f"[TEAM: {team}] [TYPE: {story_type}] {name}{epic_info}\n"
        f"    Owners: {owners}\n"
        f"    Labels: {labels}\n"
        f"    {status}\n"
        f"    Context: {description}"
    )


def format_stories_prompt(
    stories: list[EnrichedStory],
    period: str = "the last 7 days",
    language: str = "Spanish",
) -> str:
    """Format enriched stories into the changelog request prompt."""
    return CHANGELOG_REQUEST_TEMPLATE.format(
        period=period,
        stories="\n\n".join(format_story(story) for story in stories),
        language=language,
    )


def build_gemini_model(api_key: str, model_name: str = DEFAULT_MODEL) -> Model:
    """Create a Gemini model bound to an explicit API key."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))


async def generate_changelog(
    stories: list[EnrichedStory],
    api_key: str | None,
    model_name: str = DEFAULT_MODEL,
    period: str = "the last 7 days",
    language: str = "Spanish",
    agent: Agent[None, str] = changelog_agent,
    model_settings: dict[str, Any] | None = None,
) -> str:
    """Generate a Markdown changelog for the given stories.

    Args:
        stories: Enriched stories to summarize
        api_key: Gemini API key
        model_name: Gemini model identifier
        period: Human readable reporting period
        language: Output language for the changelog
        agent: PydanticAI agent to run
        model_settings: Optional model settings override

    Returns:
        Changelog text

    Raises:
        ChangelogGenerationError: If the key is missing, the model call fails
            or the model returns no text
    """
    if not api_key:
        raise ChangelogGenerationError("Missing Gemini API key")

    prompt = format_stories_prompt(stories, period=period, language=language)
    kwargs: dict[str, Any] = {"model": build_gemini_model(api_key, model_name)}
    if model_settings:
        kwargs["model_settings"] = model_settings

    try:
        result = await agent.run(prompt, **kwargs)
    except Exception as e:
        logger.error(f"Changelog generation failed: {e}")
        raise ChangelogGenerationError(f"AI error: {e}") from e

    text = (result.output or "").strip()
    if not text:
        raise ChangelogGenerationError("The AI returned an empty response.")
    return text
