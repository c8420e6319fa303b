"""Detection of partially completed stories.

A story is partial when another story with the same name sits in the same
epic (or, lacking an epic, the same iteration) and is not completed yet.
Typical case: the backend half of a feature shipped while the frontend
story with the identical title is still open.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from .client import ShortcutClient
from .models import RawStory

logger = logging.getLogger(__name__)


def normalize_name(name: str | None) -> str:
    """Normalize a story name for sibling comparison."""
    return (name or "").strip().casefold()


class PartialityResolver:
    """Resolves the partial flag for stories within one aggregation run.

    Sibling listings are cached per container id as in-flight tasks, so
    stories sharing a container trigger a single request even when they are
    checked concurrently. Create a new resolver for every run.
    """

    def __init__(self, client: ShortcutClient):
        self.client = client
        self._epic_siblings: dict[int, asyncio.Task[list[RawStory]]] = {}
        self._iteration_siblings: dict[int, asyncio.Task[list[RawStory]]] = {}

    async def is_partial(self, story: RawStory) -> bool:
        """Check whether an open, same-named sibling exists for a story.

        Never raises; lookup failures resolve to False.
        """
        if story.epic_id is not None:
            siblings = await self._siblings(
                self._epic_siblings,
                story.epic_id,
                self.client.list_epic_stories,
                "epic",
            )
        elif story.iteration_id is not None:
            siblings = await self._siblings(
                self._iteration_siblings,
                story.iteration_id,
                self.client.list_iteration_stories,
                "iteration",
            )
        else:
            return False

        target = normalize_name(story.name)
        found = any(
            sibling.id != story.id
            and normalize_name(sibling.name) == target
            and not sibling.completed
            for sibling in siblings
        )
        if found:
            logger.info(f"Partial story detected: {story.name!r} (#{story.id})")
        return found

    async def _siblings(
        self,
        cache: dict[int, asyncio.Task[list[RawStory]]],
        container_id: int,
        fetch: Callable[[int], Awaitable[list[RawStory]]],
        kind: str,
    ) -> list[RawStory]:
        # Check and populate happen without an await in between, so
        # concurrent callers always find the task created by the first one.
        task = cache.get(container_id)
        if task is None:
            task = asyncio.create_task(self._load(container_id, fetch, kind))
            cache[container_id] = task
        return await task

    async def _load(
        self,
        container_id: int,
        fetch: Callable[[int], Awaitable[list[RawStory]]],
        kind: str,
    ) -> list[RawStory]:
        logger.info(f"Loading stories for {kind} {container_id}")
        try:
            return await fetch(container_id)
        except Exception as e:
            logger.warning(f"Could not load stories for {kind} {container_id}: {e}")
            return []
