"""PydanticAI agents for changelog generation."""

from pydantic_ai import Agent

from .prompts import CHANGELOG_PROMPT

# Changelog agent - model is chosen per run
changelog_agent = Agent(
    output_type=str,
    instructions=CHANGELOG_PROMPT,
    retries=2,
)
