"""
Cart Router

Raw cart access and the per-ticket +/- selector. The selector state is
rebuilt from the store on every request, so the response always reflects
what was persisted.
"""
from fastapi import APIRouter, Depends

from eventhub.cart import CartStore, TicketSelector
from .deps import get_cart_store
from .models import SelectorRequest

router = APIRouter(tags=["cart"])


def _selector(store: CartStore, event_id: int, ticket_id: int, request: SelectorRequest) -> TicketSelector:
    return TicketSelector(
        store,
        event_id=event_id,
        ticket_id=ticket_id,
        ticket_name=request.ticket_name,
        unit_price=request.unit_price,
        stock_ceiling=request.stock_ceiling,
    )


@router.get("/cart")
async def get_cart(store: CartStore = Depends(get_cart_store)):
    """Persisted event -> ticket -> quantity map."""
    return store.load()


@router.delete("/cart")
async def clear_cart(store: CartStore = Depends(get_cart_store)):
    store.clear()
    return {}


@router.get("/cart/tickets/{event_id}/{ticket_id}")
async def get_ticket_quantity(event_id: int, ticket_id: int, store: CartStore = Depends(get_cart_store)):
    return {"event_id": event_id, "ticket_id": ticket_id, "quantity": store.get(event_id, ticket_id)}


@router.post("/cart/tickets/{event_id}/{ticket_id}/increment")
async def increment_ticket(
    event_id: int,
    ticket_id: int,
    request: SelectorRequest,
    store: CartStore = Depends(get_cart_store),
):
    """Add one ticket unless the stock ceiling is reached."""
    selector = _selector(store, event_id, ticket_id, request)
    selector.increment()
    return selector.to_dict()


@router.post("/cart/tickets/{event_id}/{ticket_id}/decrement")
async def decrement_ticket(
    event_id: int,
    ticket_id: int,
    request: SelectorRequest,
    store: CartStore = Depends(get_cart_store),
):
    """Remove one ticket unless none are selected."""
    selector = _selector(store, event_id, ticket_id, request)
    selector.decrement()
    return selector.to_dict()
