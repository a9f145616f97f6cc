"""
Events API Client

Thin async client over the JSON HTTP API that owns events, tickets,
categories and users. Every failure is mapped to one of:
- ApiError: the API answered with a non-success status (message taken from
  the response's `message` field when present)
- TransportError: the API could not be reached or sent an unusable body
"""
from typing import Any, Callable, Iterable, Optional

import httpx
from pydantic import ValidationError

from eventhub.config import get_settings
from eventhub.errors import (
    ApiError,
    TransportError,
    ERROR_CREATE_EVENT,
    ERROR_CREATE_TICKET,
    ERROR_FETCH_CATEGORIES,
    ERROR_FETCH_EVENTS,
    ERROR_FETCH_USERS,
    ERROR_LOGIN,
)
from eventhub.logging import get_logger
from eventhub.models import (
    Category,
    Event,
    EventForm,
    LoginForm,
    LoginResponse,
    MessageResponse,
    TicketForm,
    User,
)

logger = get_logger(__name__)


class EventsApiClient:
    """Client for the events API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        get_access_token: Optional[Callable[[], Optional[str]]] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._get_access_token = get_access_token

        # HTTP client (lazy, shared between requests)
        self._http_client: Optional[httpx.AsyncClient] = None

    # ==================== INTERNAL HELPERS ====================

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _headers(self, authenticated: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated and self._get_access_token:
            token = self._get_access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        """Prefer the API's own `message`, fall back to a per-operation default."""
        try:
            data = response.json()
        except ValueError:
            return default
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return default

    async def _request(
        self,
        method: str,
        path: str,
        *,
        default_error: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        authenticated: bool = False,
    ) -> Any:
        client = await self._get_http_client()
        url = f"{self.base_url}{path}"

        try:
            response = await client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(authenticated),
            )
        except httpx.RequestError as e:
            logger.error(f"Events API network error on {method} {path}: {e}")
            raise TransportError(default_error) from e

        if response.is_error:
            message = self._error_message(response, default_error)
            logger.warning(f"Events API {method} {path} returned {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Events API {method} {path} returned a non-JSON body")
            raise TransportError(default_error) from e

    @staticmethod
    def _parse_list(model, data: Any, default_error: str) -> list:
        if not isinstance(data, list):
            raise TransportError(default_error)
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise TransportError(default_error) from e

    # ==================== READ ====================

    async def list_events(self, ids: Optional[Iterable[int]] = None) -> list[Event]:
        """
        GET /events, or GET /events?ids=1,2,3 for a batched lookup.

        Args:
            ids: Event ids to fetch in one request; None fetches everything

        Returns:
            Events with their embedded tickets and category
        """
        params = None
        if ids is not None:
            params = {"ids": ",".join(str(int(event_id)) for event_id in ids)}
        data = await self._request("GET", "/events", default_error=ERROR_FETCH_EVENTS, params=params)
        return self._parse_list(Event, data, ERROR_FETCH_EVENTS)

    async def list_categories(self) -> list[Category]:
        data = await self._request("GET", "/categories", default_error=ERROR_FETCH_CATEGORIES)
        return self._parse_list(Category, data, ERROR_FETCH_CATEGORIES)

    async def list_users(self) -> list[User]:
        data = await self._request(
            "GET", "/users", default_error=ERROR_FETCH_USERS, authenticated=True
        )
        return self._parse_list(User, data, ERROR_FETCH_USERS)

    # ==================== WRITE ====================

    async def create_event(self, form: EventForm) -> MessageResponse:
        data = await self._request(
            "POST",
            "/events",
            default_error=ERROR_CREATE_EVENT,
            json=form.model_dump(mode="json"),
            authenticated=True,
        )
        return MessageResponse.model_validate(data if isinstance(data, dict) else {})

    async def create_ticket(self, event_id: int, form: TicketForm) -> MessageResponse:
        payload = form.model_dump(mode="json")
        payload["price"] = float(form.price)
        payload["event_id"] = event_id
        data = await self._request(
            "POST",
            "/tickets",
            default_error=ERROR_CREATE_TICKET,
            json=payload,
            authenticated=True,
        )
        return MessageResponse.model_validate(data if isinstance(data, dict) else {})

    async def login(self, form: LoginForm) -> LoginResponse:
        """
        POST /login.

        Raises:
            ApiError: Wrong credentials or other non-success status
            TransportError: API unreachable or response missing token/user
        """
        data = await self._request(
            "POST", "/login", default_error=ERROR_LOGIN, json=form.model_dump()
        )
        try:
            return LoginResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected login payload: {e}")
            raise TransportError(ERROR_LOGIN) from e
