"""
Storefront Router

Event browsing: home page catalog, list with search/category filter,
categories with their events, event details.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from eventhub.api.client import EventsApiClient
from eventhub.catalog import events_in_category, filter_events, load_catalog
from eventhub.errors import TransportError
from .deps import get_api_client
from .errors import to_http_exception

router = APIRouter(tags=["storefront"])


@router.get("/events")
async def list_events(
    search: str = "",
    category_id: Optional[int] = None,
    api: EventsApiClient = Depends(get_api_client),
):
    """All events matching the search text and category."""
    try:
        events = await api.list_events()
    except TransportError as e:
        raise to_http_exception(e)
    return [event.model_dump(mode="json") for event in filter_events(events, search, category_id)]


@router.get("/events/{event_id}")
async def get_event(event_id: int, api: EventsApiClient = Depends(get_api_client)):
    try:
        events = await api.list_events(ids=[event_id])
    except TransportError as e:
        raise to_http_exception(e)
    event = next((event for event in events if event.id == event_id), None)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event.model_dump(mode="json")


@router.get("/categories")
async def list_categories(api: EventsApiClient = Depends(get_api_client)):
    try:
        categories = await api.list_categories()
    except TransportError as e:
        raise to_http_exception(e)
    return [category.model_dump(mode="json") for category in categories]


@router.get("/catalog")
async def get_catalog(search: str = "", api: EventsApiClient = Depends(get_api_client)):
    """Home page: categories plus the events matching the search text."""
    try:
        catalog = await load_catalog(api)
    except TransportError as e:
        raise to_http_exception(e)
    return {
        "categories": [category.model_dump(mode="json") for category in catalog.categories],
        "events": [event.model_dump(mode="json") for event in filter_events(catalog.events, search)],
    }


@router.get("/categories/{category_id}/events")
async def list_category_events(category_id: int, api: EventsApiClient = Depends(get_api_client)):
    """Events of one category, filtered from the full list."""
    try:
        events = await api.list_events()
    except TransportError as e:
        raise to_http_exception(e)
    return [event.model_dump(mode="json") for event in events_in_category(events, category_id)]
