"""Merging of reference data and partiality onto raw stories."""

import asyncio

from .models import EnrichedStory, MemberInfo, RawStory, ReferenceMaps
from .partial import PartialityResolver

BATCH_SIZE = 5
DEFAULT_TEAM_NAME = "General"
UNASSIGNED_TEAM_NAME = "Sin Equipo"
GRAVATAR_URL = "https://www.gravatar.com/avatar/{hash}?s=200&d=retro"


def avatar_url(member: MemberInfo, token: str) -> str | None:
    """Build a displayable avatar URL for a member.

    Direct icons need the API token as a query parameter; otherwise the
    gravatar hash is used. Returns None when neither is available.
    """
    if member.avatar:
        separator = "&" if "?" in member.avatar else "?"
        return f"{member.avatar}{separator}token={token}"
    if member.gravatar:
        return GRAVATAR_URL.format(hash=member.gravatar)
    return None


def resolve_team_name(story: RawStory, teams: dict[str, str]) -> str:
    """Team name for a story, with defaults for missing or unknown groups."""
    if story.group_id is None:
        return DEFAULT_TEAM_NAME
    return teams.get(story.group_id, UNASSIGNED_TEAM_NAME)


def resolve_epic_name(story: RawStory, epics: dict[int, str]) -> str | None:
    if story.epic_id is None:
        return None
    return epics.get(story.epic_id)


class BatchEnricher:
    """Enriches stories in fixed-size groups.

    Stories inside a group are processed concurrently; groups run one after
    another. Output order always matches input order.
    """

    def __init__(
        self,
        reference: ReferenceMaps,
        resolver: PartialityResolver,
        token: str,
        batch_size: int = BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("Batch size must be a positive integer")
        self.reference = reference
        self.resolver = resolver
        self.token = token
        self.batch_size = batch_size

    async def enrich(self, stories: list[RawStory]) -> list[EnrichedStory]:
        """Enrich all stories, preserving their order."""
        enriched: list[EnrichedStory] = []
        for i in range(0, len(stories), self.batch_size):
            batch = stories[i : i + self.batch_size]
            results = await asyncio.gather(
                *(self.enrich_story(story) for story in batch)
            )
            enriched.extend(results)
        return enriched

    async def enrich_story(self, story: RawStory) -> EnrichedStory:
        """Enrich a single story."""
        is_partial = await self.resolver.is_partial(story)

        owners = [
            self.reference.members[owner_id]
            for owner_id in story.owner_ids
            if owner_id in self.reference.members
        ]
        owner_names = [owner.name for owner in owners]
        owner_avatars = [
            url
            for url in (avatar_url(owner, self.token) for owner in owners)
            if url is not None
        ]

        return EnrichedStory.from_raw(
            story,
            team_name=resolve_team_name(story, self.reference.teams),
            epic_name=resolve_epic_name(story, self.reference.epics),
            owner_names=owner_names or None,
            owner_avatars=owner_avatars or None,
            is_partial=is_partial,
        )
