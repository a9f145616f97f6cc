"""
Admin Router

Dashboard endpoints: user list, event and ticket creation. Forms are
validated here before anything reaches the events API.
"""
from fastapi import APIRouter, Depends

from eventhub.api.client import EventsApiClient
from eventhub.errors import TransportError
from eventhub.logging import get_logger, sanitize_string_for_logging
from eventhub.models import EventForm, TicketForm
from .deps import get_api_client, require_admin
from .errors import to_http_exception
from .models import CreateTicketRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users")
async def list_users(api: EventsApiClient = Depends(get_api_client)):
    try:
        users = await api.list_users()
    except TransportError as e:
        raise to_http_exception(e)
    return [user.model_dump(mode="json") for user in users]


@router.get("/events")
async def list_events(api: EventsApiClient = Depends(get_api_client)):
    try:
        events = await api.list_events()
    except TransportError as e:
        raise to_http_exception(e)
    return [event.model_dump(mode="json") for event in events]


@router.post("/events", status_code=201)
async def create_event(form: EventForm, api: EventsApiClient = Depends(get_api_client)):
    try:
        response = await api.create_event(form)
    except TransportError as e:
        raise to_http_exception(e)
    logger.info(f"Created event {sanitize_string_for_logging(form.name)}")
    return response.model_dump()


@router.post("/tickets", status_code=201)
async def create_ticket(request: CreateTicketRequest, api: EventsApiClient = Depends(get_api_client)):
    form = TicketForm(
        name=request.name,
        price=request.price,
        tickets_available=request.tickets_available,
    )
    try:
        response = await api.create_ticket(request.event_id, form)
    except TransportError as e:
        raise to_http_exception(e)
    logger.info(f"Created ticket {sanitize_string_for_logging(form.name)} for event {request.event_id}")
    return response.model_dump()
