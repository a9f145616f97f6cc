"""
Shared Dependencies for Routers

Process-wide singletons: one storage backend, one cart, one API client.
The storefront serves a single shopper, the way one browser profile does.
"""

from typing import Optional

from fastapi import Depends, HTTPException

from eventhub.api.client import EventsApiClient
from eventhub.auth import Session, SessionStore
from eventhub.cart import CartReconciler, CartStore
from eventhub.checkout import CheckoutSubmission, LoggingOrderPlacer, OrderPlacer
from eventhub.errors import ERROR_ADMIN_REQUIRED, ERROR_UNAUTHORIZED
from eventhub.storage import KeyValueStorage, create_storage


# ==================== LAZY SINGLETONS ====================

_storage: Optional[KeyValueStorage] = None
_api_client: Optional[EventsApiClient] = None
_checkout_submission: Optional[CheckoutSubmission] = None


def get_storage() -> KeyValueStorage:
    """Get or create the configured storage backend"""
    global _storage
    if _storage is None:
        _storage = create_storage()
    return _storage


def get_cart_store(storage: KeyValueStorage = Depends(get_storage)) -> CartStore:
    return CartStore(storage)


def get_session_store(storage: KeyValueStorage = Depends(get_storage)) -> SessionStore:
    return SessionStore(storage)


def get_api_client() -> EventsApiClient:
    """Get or create the events API client; requests carry the stored token"""
    global _api_client
    if _api_client is None:
        sessions = SessionStore(get_storage())
        _api_client = EventsApiClient(get_access_token=sessions.access_token)
    return _api_client


def get_reconciler(
    store: CartStore = Depends(get_cart_store),
    api: EventsApiClient = Depends(get_api_client),
) -> CartReconciler:
    return CartReconciler(store, api)


def get_order_placer() -> OrderPlacer:
    return LoggingOrderPlacer()


def get_checkout_submission(
    store: CartStore = Depends(get_cart_store),
    order_placer: OrderPlacer = Depends(get_order_placer),
) -> CheckoutSubmission:
    """Single instance so the in-flight guard spans requests"""
    global _checkout_submission
    if _checkout_submission is None:
        _checkout_submission = CheckoutSubmission(store, order_placer)
    return _checkout_submission


# ==================== AUTH ====================

def get_session(sessions: SessionStore = Depends(get_session_store)) -> Session:
    return sessions.load()


def require_admin(session: Session = Depends(get_session)) -> Session:
    if not session.is_logged_in:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    if not session.is_admin:
        raise HTTPException(status_code=403, detail=ERROR_ADMIN_REQUIRED)
    return session


# ==================== SHUTDOWN HELPERS ====================

async def shutdown_services():
    """Cleanly close singleton services (http clients, etc.)."""
    global _api_client, _checkout_submission, _storage
    if _api_client is not None:
        try:
            await _api_client.close()
        finally:
            _api_client = None
    _checkout_submission = None
    _storage = None
