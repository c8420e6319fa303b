"""Entry point for collecting enriched completed stories."""

import asyncio
import contextlib
import logging
from datetime import datetime

from .client import ShortcutAPIError, ShortcutClient, format_timestamp
from .enricher import BATCH_SIZE, BatchEnricher
from .models import EnrichedStory
from .partial import PartialityResolver
from .reference import ReferenceDataLoader

logger = logging.getLogger(__name__)


class TrackerAggregator:
    """Collects completed stories and enriches them for reporting."""

    def __init__(self, client: ShortcutClient, batch_size: int = BATCH_SIZE):
        self.client = client
        self.batch_size = batch_size
        self.reference_loader = ReferenceDataLoader(client)

    async def get_completed_stories(
        self, start: datetime | str, end: datetime | str
    ) -> list[EnrichedStory]:
        """Get stories completed between two instants, enriched for reporting.

        Reference data and the story search run concurrently. Reference data
        failures only degrade enrichment; a failed search aborts the run.

        Args:
            start: Earliest completion timestamp (ISO 8601 or datetime)
            end: Latest completion timestamp (ISO 8601 or datetime)

        Returns:
            Enriched stories in search response order

        Raises:
            ShortcutAPIError: If the story search fails
        """
        logger.info(
            f"Searching stories completed between {format_timestamp(start)} "
            f"and {format_timestamp(end)}"
        )
        # Sibling caches live only as long as this resolver.
        resolver = PartialityResolver(self.client)

        reference_task = asyncio.create_task(self.reference_loader.load_all())
        try:
            stories = await self.client.search_stories(start, end)
        except BaseException as e:
            if isinstance(e, ShortcutAPIError):
                logger.error(f"Story search failed: {e}")
            reference_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reference_task
            raise
        reference = await reference_task

        logger.debug(f"Search returned {len(stories)} stories")
        enricher = BatchEnricher(
            reference, resolver, self.client.token, batch_size=self.batch_size
        )
        return await enricher.enrich(stories)
