"""Best-effort loading of team, epic and member reference data."""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .client import ShortcutClient
from .models import (
    EpicPayload,
    GroupPayload,
    MemberInfo,
    MemberPayload,
    ReferenceMaps,
)

logger = logging.getLogger(__name__)

UNKNOWN_MEMBER_NAME = "Unknown user"

# Failures that degrade a lookup table to empty instead of aborting a run.
DEGRADABLE_ERRORS = (httpx.HTTPError, ValueError, ValidationError)

_groups_adapter = TypeAdapter(list[GroupPayload])
_epics_adapter = TypeAdapter(list[EpicPayload])
_members_adapter = TypeAdapter(list[MemberPayload])


def member_info(member: MemberPayload) -> MemberInfo:
    """Convert a validated member entry to display details.

    The name falls back from profile name to mention name to a placeholder.
    """
    profile = member.profile
    if profile is None:
        return MemberInfo(name=UNKNOWN_MEMBER_NAME)
    return MemberInfo(
        name=profile.name or profile.mention_name or UNKNOWN_MEMBER_NAME,
        avatar=(profile.display_icon.url if profile.display_icon else None) or None,
        gravatar=profile.gravatar_hash or None,
    )


def member_from_payload(member: Any) -> MemberInfo:
    """Validate a raw member payload and convert it to display details.

    Raises:
        ValidationError: If the payload is not a member object
    """
    return member_info(MemberPayload.model_validate(member))


class ReferenceDataLoader:
    """Loads the lookup tables used to enrich stories.

    Each table is independent; a failed load or a malformed entry anywhere in
    a listing yields an empty mapping for that table.
    """

    def __init__(self, client: ShortcutClient):
        self.client = client

    async def load_teams(self) -> dict[str, str]:
        """Map group id to team name."""
        try:
            groups = _groups_adapter.validate_python(await self.client.list_groups())
        except DEGRADABLE_ERRORS as e:
            logger.warning(f"Could not load teams: {e}")
            return {}
        return {group.id: group.name for group in groups}

    async def load_epics(self) -> dict[int, str]:
        """Map epic id to epic name."""
        try:
            epics = _epics_adapter.validate_python(await self.client.list_epics())
        except DEGRADABLE_ERRORS as e:
            logger.warning(f"Could not load epics: {e}")
            return {}
        return {epic.id: epic.name for epic in epics}

    async def load_members(self) -> dict[str, MemberInfo]:
        """Map member id to display details."""
        try:
            members = _members_adapter.validate_python(
                await self.client.list_members()
            )
        except DEGRADABLE_ERRORS as e:
            logger.warning(f"Could not load members: {e}")
            return {}
        return {member.id: member_info(member) for member in members}

    async def load_all(self) -> ReferenceMaps:
        """Load all three tables concurrently."""
        teams, epics, members = await asyncio.gather(
            self.load_teams(), self.load_epics(), self.load_members()
        )
        return ReferenceMaps(teams=teams, epics=epics, members=members)
