"""Shortcut REST API client using httpx."""

import os
from datetime import datetime, timezone
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from .models import RawStory

DEFAULT_BASE_URL = "https://api.app.shortcut.com/api/v3"


class ShortcutAPIError(Exception):
    """Raised when a required Shortcut request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def format_timestamp(value: datetime | str) -> str:
    """Render a timestamp as an ISO-8601 UTC string accepted by Shortcut.

    Strings are passed through untouched. Naive datetimes are taken as UTC.
    """
    if isinstance(value, str):
        return value
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


class ShortcutClient:
    """Authenticated async access to the Shortcut endpoints used for reports."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        """Initialize Shortcut client with authentication.

        Args:
            token: Shortcut API token. If None, reads from SHORTCUT_TOKEN env var.
            base_url: API root. If None, reads SHORTCUT_API_URL or uses the
                public v3 endpoint.
            http_client: Pre-built client to send requests through.
            timeout: Per-request timeout in seconds for the default client.
        """
        self.token = token or os.getenv("SHORTCUT_TOKEN")
        if not self.token:
            raise ValueError(
                "Shortcut token is required. Set SHORTCUT_TOKEN environment variable."
            )

        self.base_url = (
            base_url or os.getenv("SHORTCUT_API_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        self.headers = {
            "Shortcut-Token": self.token,
            "Content-Type": "application/json",
        }
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "ShortcutClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(self, path: str) -> Any:
        """GET a path and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-success status
            httpx.HTTPError: On transport failures
            ValueError: If the body is not valid JSON
        """
        response = await self._http.get(self._url(path), headers=self.headers)
        response.raise_for_status()
        return response.json()

    async def list_groups(self) -> list[dict[str, Any]]:
        """List teams (groups) in the workspace."""
        return _expect_list(await self.get_json("groups"), "groups")

    async def list_epics(self) -> list[dict[str, Any]]:
        """List epics in the workspace."""
        return _expect_list(await self.get_json("epics"), "epics")

    async def list_members(self) -> list[dict[str, Any]]:
        """List workspace members."""
        return _expect_list(await self.get_json("members"), "members")

    async def list_epic_stories(self, epic_id: int) -> list[RawStory]:
        """List every story in an epic."""
        data = await self.get_json(f"epics/{epic_id}/stories")
        return _parse_stories(_expect_list(data, f"epic {epic_id} stories"))

    async def list_iteration_stories(self, iteration_id: int) -> list[RawStory]:
        """List every story in an iteration."""
        data = await self.get_json(f"iterations/{iteration_id}/stories")
        return _parse_stories(_expect_list(data, f"iteration {iteration_id} stories"))

    async def search_stories(
        self, start: datetime | str, end: datetime | str
    ) -> list[RawStory]:
        """Search for non-archived stories completed within [start, end].

        Args:
            start: Earliest completion timestamp
            end: Latest completion timestamp

        Returns:
            Stories in the order returned by the API

        Raises:
            ShortcutAPIError: If the request fails or the response is unusable
        """
        body = {
            "completed_at_start": format_timestamp(start),
            "completed_at_end": format_timestamp(end),
            "archived": False,
        }
        try:
            response = await self._http.post(
                self._url("stories/search"), headers=self.headers, json=body
            )
        except httpx.HTTPError as e:
            raise ShortcutAPIError(f"Shortcut API request failed: {e}") from e

        if not response.is_success:
            raise ShortcutAPIError(
                f"Shortcut API Error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            return _parse_stories(_expect_list(data, "story search"))
        except (ValueError, ValidationError) as e:
            raise ShortcutAPIError(
                f"Unexpected story search response: {e}",
                status_code=response.status_code,
            ) from e


def _expect_list(data: Any, what: str) -> list[Any]:
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {what}, got {type(data).__name__}")
    return data


def _parse_stories(items: list[Any]) -> list[RawStory]:
    return [RawStory.model_validate(item) for item in items]
