"""
Cart Reconciler

Turns the persisted cart into priced line items using freshly fetched
event data. Stale references (deleted events or ticket types) are dropped
without an error; only a failed fetch is reported to the caller.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from eventhub.api.client import EventsApiClient
from eventhub.errors import ERROR_LOAD_CART, TransportError
from eventhub.logging import get_logger, sanitize_id_for_logging
from eventhub.models import Event
from eventhub.money import multiply
from .models import LineItem, ReconciledCart
from .store import CartData, CartStore

logger = get_logger(__name__)


def find_event(events_by_id: dict[int, Event], event_key: str) -> Optional[Event]:
    """Look up a fetched event by its cart key."""
    return events_by_id.get(int(event_key))


class CartReconciler:
    """Joins the persisted cart against live event/ticket records."""

    def __init__(self, store: CartStore, api: EventsApiClient):
        self._store = store
        self._api = api

    async def reconcile(self) -> ReconciledCart:
        """
        Build the checkout line items.

        Returns:
            ReconciledCart in the cart's stored order (events, then tickets)

        Raises:
            TransportError: The batched event fetch failed
        """
        cart = self._store.load()
        if not cart:
            return ReconciledCart()

        # Keys of the persisted map are already unique
        event_ids = [int(event_key) for event_key in cart]
        events = await self._api.list_events(ids=event_ids)

        return self.join(cart, {event.id: event for event in events})

    @staticmethod
    def join(cart: CartData, events_by_id: dict[int, Event]) -> ReconciledCart:
        """Single pass over the cart: emit a line item per live ticket, sum as we go."""
        items: list[LineItem] = []
        total = Decimal("0")

        for event_key, quantities in cart.items():
            event = find_event(events_by_id, event_key)
            if event is None:
                logger.debug(f"Skipping cart event {sanitize_id_for_logging(event_key)}: no longer available")
                continue

            for ticket_key, quantity in quantities.items():
                ticket = event.find_ticket(int(ticket_key))
                if ticket is None:
                    logger.debug(
                        f"Skipping cart ticket {sanitize_id_for_logging(ticket_key)} "
                        f"of event {event.id}: no longer available"
                    )
                    continue

                # Quantity is not clamped to current stock; exceeds_stock flags it
                items.append(LineItem(
                    ticket_id=ticket.id,
                    event_id=event.id,
                    event_name=event.name,
                    ticket_name=ticket.name,
                    unit_price=ticket.price,
                    quantity=quantity,
                    tickets_available=ticket.tickets_available,
                ))
                total += multiply(ticket.price, quantity)

        return ReconciledCart(items=items, total=total)


@dataclass
class CheckoutState:
    """Outcome of loading the checkout page: a cart or a retryable error."""
    cart: Optional[ReconciledCart] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CheckoutLoader:
    """
    Explicit one-shot initialization for the checkout page.

    Retrying is calling load() again; nothing is retried automatically.
    """

    def __init__(self, reconciler: CartReconciler):
        self._reconciler = reconciler
        self.state: Optional[CheckoutState] = None

    async def load(self) -> CheckoutState:
        try:
            cart = await self._reconciler.reconcile()
        except TransportError as e:
            logger.error(f"Error fetching cart data: {e.message}")
            self.state = CheckoutState(error=ERROR_LOAD_CART)
        else:
            self.state = CheckoutState(cart=cart)
        return self.state
