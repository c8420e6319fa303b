"""Shortcut client package for story aggregation."""

from .aggregator import TrackerAggregator
from .client import ShortcutAPIError, ShortcutClient
from .enricher import BatchEnricher
from .models import (
    ChangelogData,
    EnrichedStory,
    MemberInfo,
    RawStory,
    ReferenceMaps,
    StoryLabel,
    WeekRange,
)
from .partial import PartialityResolver
from .reference import ReferenceDataLoader

__all__ = [
    "TrackerAggregator",
    "ShortcutClient",
    "ShortcutAPIError",
    "ReferenceDataLoader",
    "PartialityResolver",
    "BatchEnricher",
    "StoryLabel",
    "RawStory",
    "MemberInfo",
    "ReferenceMaps",
    "EnrichedStory",
    "WeekRange",
    "ChangelogData",
]
