"""Tests for reference data loading."""

import httpx
import pytest

from shortcut_changelog.shortcut_client.client import ShortcutClient
from shortcut_changelog.shortcut_client.models import MemberInfo
from shortcut_changelog.shortcut_client.reference import (
    UNKNOWN_MEMBER_NAME,
    ReferenceDataLoader,
    member_from_payload,
)
from tests.conftest import FakeShortcutAPI


class TestMemberFromPayload:
    """Test member payload conversion."""

    def test_profile_name_preferred(self) -> None:
        member = member_from_payload(
            {
                "id": "u1",
                "profile": {
                    "name": "Ana Pérez",
                    "mention_name": "ana",
                    "display_icon": {"url": "https://cdn.test/ana.png"},
                    "gravatar_hash": "abc",
                },
            }
        )
        assert member == MemberInfo(
            name="Ana Pérez", avatar="https://cdn.test/ana.png", gravatar="abc"
        )

    def test_mention_name_fallback(self) -> None:
        member = member_from_payload({"id": "u1", "profile": {"mention_name": "ana"}})
        assert member.name == "ana"

    def test_unknown_user_fallback(self) -> None:
        """Test the placeholder when the profile has no usable name."""
        member = member_from_payload({"id": "u1", "profile": {"name": ""}})
        assert member.name == UNKNOWN_MEMBER_NAME

    def test_missing_profile(self) -> None:
        member = member_from_payload({"id": "u1"})
        assert member.name == UNKNOWN_MEMBER_NAME
        assert member.avatar is None
        assert member.gravatar is None

    def test_null_display_icon(self) -> None:
        member = member_from_payload(
            {"id": "u1", "profile": {"name": "Bo", "display_icon": None}}
        )
        assert member.avatar is None


class TestReferenceDataLoader:
    """Test ReferenceDataLoader."""

    @pytest.mark.asyncio
    async def test_load_teams(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        """Test that groups become an id to name mapping."""
        fake_api.set(
            "GET /groups",
            [{"id": "1", "name": "Frontend Team"}, {"id": "2", "name": "Backend Team"}],
        )

        teams = await ReferenceDataLoader(client).load_teams()

        assert teams == {"1": "Frontend Team", "2": "Backend Team"}

    @pytest.mark.asyncio
    async def test_load_epics(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        fake_api.set("GET /epics", [{"id": 101, "name": "Epic X"}])

        epics = await ReferenceDataLoader(client).load_epics()

        assert epics == {101: "Epic X"}

    @pytest.mark.asyncio
    async def test_load_members(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        fake_api.set("GET /members", [{"id": "u1", "profile": {"name": "User 1"}}])

        members = await ReferenceDataLoader(client).load_members()

        assert members == {"u1": MemberInfo(name="User 1")}

    @pytest.mark.asyncio
    async def test_network_error_yields_empty(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        """Test that a failing fetch returns an empty mapping."""
        fake_api.set("GET /groups", httpx.ConnectError("Network error"))

        teams = await ReferenceDataLoader(client).load_teams()

        assert teams == {}

    @pytest.mark.asyncio
    async def test_error_status_yields_empty(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        fake_api.set("GET /epics", 503)

        assert await ReferenceDataLoader(client).load_epics() == {}

    @pytest.mark.asyncio
    async def test_malformed_body_yields_empty(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        """Test that malformed bodies degrade instead of raising."""
        fake_api.set("GET /members", "<html>oops</html>")
        fake_api.set("GET /epics", [{"name": "no id"}])

        loader = ReferenceDataLoader(client)

        assert await loader.load_members() == {}
        assert await loader.load_epics() == {}

    @pytest.mark.asyncio
    async def test_failure_is_logged(
        self,
        client: ShortcutClient,
        fake_api: FakeShortcutAPI,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fake_api.set("GET /groups", 500)

        with caplog.at_level("WARNING"):
            await ReferenceDataLoader(client).load_teams()

        assert "Could not load teams" in caplog.text

    @pytest.mark.asyncio
    async def test_load_all_independent(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        """Test that one failing table does not affect the others."""
        fake_api.set("GET /groups", [{"id": "g1", "name": "Team A"}])
        fake_api.set("GET /epics", 500)
        fake_api.set("GET /members", [{"id": "u1", "profile": {"name": "User 1"}}])

        reference = await ReferenceDataLoader(client).load_all()

        assert reference.teams == {"g1": "Team A"}
        assert reference.epics == {}
        assert reference.members == {"u1": MemberInfo(name="User 1")}

    @pytest.mark.asyncio
    async def test_member_with_non_object_profile(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        """Test that a profile that is not an object degrades the member table."""
        fake_api.set("GET /members", [{"id": "u1", "profile": "oops"}])

        assert await ReferenceDataLoader(client).load_members() == {}

    @pytest.mark.asyncio
    async def test_member_entry_not_an_object(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        fake_api.set(
            "GET /members", [{"id": "u1", "profile": {"name": "User 1"}}, 42]
        )

        assert await ReferenceDataLoader(client).load_members() == {}

    @pytest.mark.asyncio
    async def test_null_names_degrade(
        self,
        client: ShortcutClient,
        fake_api: FakeShortcutAPI,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that null team or epic names empty that table only."""
        fake_api.set("GET /groups", [{"id": "g1", "name": None}])
        fake_api.set("GET /epics", [{"id": 101, "name": None}])
        fake_api.set("GET /members", [{"id": "u1", "profile": {"name": "User 1"}}])

        with caplog.at_level("WARNING"):
            reference = await ReferenceDataLoader(client).load_all()

        assert reference.teams == {}
        assert reference.epics == {}
        assert reference.members == {"u1": MemberInfo(name="User 1")}
        assert "Could not load teams" in caplog.text
        assert "Could not load epics" in caplog.text

    @pytest.mark.asyncio
    async def test_numeric_group_id_kept_as_string(
        self, client: ShortcutClient, fake_api: FakeShortcutAPI
    ) -> None:
        fake_api.set("GET /groups", [{"id": 7, "name": "Team A"}])

        assert await ReferenceDataLoader(client).load_teams() == {"7": "Team A"}
