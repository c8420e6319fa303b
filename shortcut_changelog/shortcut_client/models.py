"""Pydantic models for Shortcut data structures.

Raw models map to Shortcut's REST API v3 response structures.
API Reference: https://developer.shortcut.com/api/rest/v3
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

StoryType = Literal["feature", "bug", "chore"]


class StoryLabel(BaseModel):
    """Label attached to a story.

    Maps to the Shortcut REST API LabelSlim object (name only).
    """

    name: str = Field(..., description="Name of the label (string)")


class RawStory(BaseModel):
    """Story as returned by the search and container listing endpoints.

    Only the fields below are kept; anything else in the payload is ignored.
    API Reference: https://developer.shortcut.com/api/rest/v3#StorySlim
    """

    id: int = Field(..., description="Unique story identifier (integer)")
    name: str = Field("", description="Title of the story (string)")
    description: str = Field("", description="Markdown description (string)")
    story_type: StoryType | None = Field(
        None, description="Story type: 'feature', 'bug' or 'chore'"
    )
    completed_at: datetime | None = Field(
        None, description="Timestamp of story completion (ISO 8601)"
    )
    app_url: str = Field("", description="Link to the story in the Shortcut app")
    labels: list[StoryLabel] = Field(
        default_factory=list, description="Labels attached to the story"
    )
    group_id: str | None = Field(None, description="Team (group) UUID")
    epic_id: int | None = Field(None, description="Epic identifier (integer)")
    iteration_id: int | None = Field(
        None, description="Iteration identifier (integer)"
    )
    owner_ids: list[str] = Field(
        default_factory=list, description="Member UUIDs owning the story"
    )
    completed: bool = Field(False, description="Whether the story is completed")


class GroupPayload(BaseModel):
    """Team (group) entry from the groups listing."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Group UUID")
    name: str = Field(..., description="Team name")


class EpicPayload(BaseModel):
    """Epic entry from the epics listing."""

    id: int = Field(..., description="Epic identifier (integer)")
    name: str = Field(..., description="Epic name")


class DisplayIcon(BaseModel):
    url: str | None = Field(None, description="Direct icon URL")


class MemberProfile(BaseModel):
    """Profile portion of a member entry."""

    name: str | None = Field(None, description="Full display name")
    mention_name: str | None = Field(None, description="@mention handle")
    display_icon: DisplayIcon | None = Field(None, description="Uploaded icon")
    gravatar_hash: str | None = Field(None, description="Gravatar email hash")


class MemberPayload(BaseModel):
    """Member entry from the members listing."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Member UUID")
    profile: MemberProfile | None = Field(None, description="Member profile")


class MemberInfo(BaseModel):
    """Display details resolved for a workspace member."""

    name: str = Field(..., description="Display name")
    avatar: str | None = Field(None, description="Direct display icon URL")
    gravatar: str | None = Field(None, description="Gravatar hash fallback")


class ReferenceMaps(BaseModel):
    """Lookup tables translating team, epic and member ids into display data.

    Built once per aggregation run and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    teams: dict[str, str] = Field(
        default_factory=dict, description="Group id to team name"
    )
    epics: dict[int, str] = Field(
        default_factory=dict, description="Epic id to epic name"
    )
    members: dict[str, MemberInfo] = Field(
        default_factory=dict, description="Member id to member details"
    )


class EnrichedStory(RawStory):
    """Story with team, epic, owner and partiality data merged in.

    ``epic_name``, ``owner_names`` and ``owner_avatars`` are ``None`` when
    nothing resolved, and are left out of :meth:`to_output`.
    """

    team_name: str = Field(..., description="Resolved team name or default")
    epic_name: str | None = Field(None, description="Resolved epic name")
    owner_names: list[str] | None = Field(
        None, description="Display names of resolved owners"
    )
    owner_avatars: list[str] | None = Field(
        None, description="Avatar URLs of resolved owners"
    )
    is_partial: bool = Field(
        False, description="A same-named sibling in the container is still open"
    )

    @classmethod
    def from_raw(
        cls,
        story: RawStory,
        *,
        team_name: str,
        epic_name: str | None,
        owner_names: list[str] | None,
        owner_avatars: list[str] | None,
        is_partial: bool,
    ) -> "EnrichedStory":
        """Build an enriched story, copying each raw field explicitly."""
        return cls(
            id=story.id,
            name=story.name,
            description=story.description,
            story_type=story.story_type,
            completed_at=story.completed_at,
            app_url=story.app_url,
            labels=[label.model_copy() for label in story.labels],
            group_id=story.group_id,
            epic_id=story.epic_id,
            iteration_id=story.iteration_id,
            owner_ids=list(story.owner_ids),
            completed=story.completed,
            team_name=team_name,
            epic_name=epic_name,
            owner_names=owner_names,
            owner_avatars=owner_avatars,
            is_partial=is_partial,
        )

    def to_output(self) -> dict[str, Any]:
        """Serialize for display or export, omitting unresolved fields."""
        return self.model_dump(mode="json", exclude_none=True)


class WeekRange(BaseModel):
    """A selectable Monday-to-Sunday reporting window."""

    label: str = Field(..., description="Human readable label")
    start: datetime = Field(..., description="Start of the window (inclusive)")
    end: datetime = Field(..., description="End of the window (inclusive)")


class ChangelogData(BaseModel):
    """A generated changelog ready for display or storage."""

    title: str = Field(..., description="Changelog title")
    content: str = Field(..., description="Markdown content")
    generated_at: datetime = Field(..., description="Generation timestamp")
