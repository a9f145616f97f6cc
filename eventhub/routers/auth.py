"""
Auth Router

Login against the events API and keep the returned token/user locally.
"""
from fastapi import APIRouter, Depends

from eventhub.api.client import EventsApiClient
from eventhub.auth import Session, SessionStore
from eventhub.errors import TransportError
from eventhub.logging import get_logger, sanitize_id_for_logging
from eventhub.models import LoginForm
from .deps import get_api_client, get_session, get_session_store
from .errors import to_http_exception

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


def _session_payload(session: Session) -> dict:
    return {
        "is_logged_in": session.is_logged_in,
        "user": session.user.model_dump(mode="json") if session.user else None,
        "landing_path": session.landing_path,
    }


@router.post("/login")
async def login(
    form: LoginForm,
    api: EventsApiClient = Depends(get_api_client),
    sessions: SessionStore = Depends(get_session_store),
):
    try:
        response = await api.login(form)
    except TransportError as e:
        raise to_http_exception(e)

    session = sessions.save(response)
    logger.info(f"User {sanitize_id_for_logging(response.user.id)} logged in as {response.user.role.value}")
    return {"message": response.message, **_session_payload(session)}


@router.post("/logout")
async def logout(sessions: SessionStore = Depends(get_session_store)):
    sessions.clear()
    return {"is_logged_in": False}


@router.get("/session")
async def get_current_session(session: Session = Depends(get_session)):
    return _session_payload(session)
