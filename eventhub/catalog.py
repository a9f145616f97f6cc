"""
Catalog Browsing

Client-side search and category filtering over the fetched event list.
The collections are small, so filtering happens in memory.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Optional

from eventhub.api.client import EventsApiClient
from eventhub.logging import get_logger
from eventhub.models import Category, Event

logger = get_logger(__name__)


@dataclass
class Catalog:
    """Events and categories fetched together."""
    events: list[Event] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)


async def load_catalog(api: EventsApiClient) -> Catalog:
    """Fetch categories and events concurrently."""
    categories, events = await asyncio.gather(api.list_categories(), api.list_events())
    logger.debug(f"Loaded catalog: {len(events)} events, {len(categories)} categories")
    return Catalog(events=events, categories=categories)


def matches_search(event: Event, search: str) -> bool:
    """Case-insensitive substring match on name, venue or description."""
    if not search:
        return True
    needle = search.lower()
    return (
        needle in event.name.lower()
        or needle in event.venue.lower()
        or needle in event.description.lower()
    )


def filter_events(
    events: list[Event],
    search: str = "",
    category_id: Optional[int] = None,
) -> list[Event]:
    """Events matching both the search text and the category (None = all)."""
    return [
        event
        for event in events
        if matches_search(event, search)
        and (category_id is None or event.category_id == category_id)
    ]


def events_in_category(events: list[Event], category_id: int) -> list[Event]:
    return filter_events(events, category_id=category_id)
