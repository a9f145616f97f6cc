"""Ticket selector: +/- control for one ticket type, backed by the cart store."""
from decimal import Decimal
from typing import Callable, Optional

from eventhub.money import format_money, multiply, to_decimal
from .store import CartStore


class TicketSelector:
    """
    Quantity picker for a single (event, ticket) pair.

    The stock ceiling is whatever the caller rendered with; it is not
    re-checked against the API here. Every change is written to the store
    before on_change is called.
    """

    def __init__(
        self,
        store: CartStore,
        event_id: int,
        ticket_id: int,
        ticket_name: str,
        unit_price,
        stock_ceiling: int,
        on_change: Optional[Callable[[int], None]] = None,
    ):
        self._store = store
        self.ticket_name = ticket_name
        self.unit_price = to_decimal(unit_price)
        self.stock_ceiling = max(0, int(stock_ceiling))
        self._on_change = on_change
        self.event_id = event_id
        self.ticket_id = ticket_id
        self.quantity = store.get(event_id, ticket_id)

    def rebind(
        self,
        event_id: int,
        ticket_id: int,
        ticket_name: str,
        unit_price,
        stock_ceiling: int,
    ) -> None:
        """
        Re-render with another ticket's props.

        Name, price and ceiling are always replaced; the quantity is reloaded
        from the store only when the (event, ticket) identity changes.
        """
        self.ticket_name = ticket_name
        self.unit_price = to_decimal(unit_price)
        self.stock_ceiling = max(0, int(stock_ceiling))
        if (event_id, ticket_id) == (self.event_id, self.ticket_id):
            return
        self.event_id = event_id
        self.ticket_id = ticket_id
        self.quantity = self._store.get(event_id, ticket_id)

    @property
    def can_increment(self) -> bool:
        return self.quantity < self.stock_ceiling

    @property
    def can_decrement(self) -> bool:
        return self.quantity > 0

    def increment(self) -> int:
        if not self.can_increment:
            return self.quantity
        self._update(self.quantity + 1)
        return self.quantity

    def decrement(self) -> int:
        if not self.can_decrement:
            return self.quantity
        self._update(self.quantity - 1)
        return self.quantity

    def _update(self, quantity: int) -> None:
        self.quantity = quantity
        self._store.set(self.event_id, self.ticket_id, quantity)
        if self._on_change is not None:
            self._on_change(quantity)

    @property
    def subtotal(self) -> Optional[Decimal]:
        """quantity x unit price, shown only once something is selected."""
        if self.quantity <= 0:
            return None
        return multiply(self.unit_price, self.quantity)

    @property
    def display_subtotal(self) -> Optional[str]:
        subtotal = self.subtotal
        return format_money(subtotal) if subtotal is not None else None

    def to_dict(self) -> dict:
        subtotal = self.subtotal
        return {
            "event_id": self.event_id,
            "ticket_id": self.ticket_id,
            "ticket_name": self.ticket_name,
            "quantity": self.quantity,
            "stock_ceiling": self.stock_ceiling,
            "can_increment": self.can_increment,
            "can_decrement": self.can_decrement,
            "subtotal": float(subtotal) if subtotal is not None else None,
            "display_subtotal": self.display_subtotal,
        }
