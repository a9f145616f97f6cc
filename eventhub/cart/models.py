"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from eventhub.money import format_money, multiply, round_money, to_decimal, to_float


@dataclass
class LineItem:
    """A persisted cart entry joined with live event/ticket data."""
    ticket_id: int
    event_id: int
    event_name: str
    ticket_name: str
    unit_price: Decimal
    quantity: int
    tickets_available: int  # Stock as of the last fetch

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)

    @property
    def name(self) -> str:
        """Display name, e.g. "Event1 - VIP"."""
        return f"{self.event_name} - {self.ticket_name}"

    @property
    def total_price(self) -> Decimal:
        """Total price for all units."""
        return round_money(multiply(self.unit_price, self.quantity))

    @property
    def exceeds_stock(self) -> bool:
        """Selected more than the API currently has available."""
        return self.quantity > self.tickets_available

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "id": self.ticket_id,
            "event_id": self.event_id,
            "name": self.name,
            "event_name": self.event_name,
            "ticket_name": self.ticket_name,
            "price": to_float(self.unit_price),
            "quantity": self.quantity,
            "tickets_available": self.tickets_available,
            "total": to_float(self.total_price),
            "display_total": format_money(self.total_price),
            "exceeds_stock": self.exceeds_stock,
        }


@dataclass
class ReconciledCart:
    """Priced line items ready for checkout."""
    items: List[LineItem] = field(default_factory=list)
    total: Decimal = Decimal("0")

    def __post_init__(self):
        self.total = to_decimal(self.total)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_quantity(self) -> int:
        """Total number of tickets in cart."""
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "items": [item.to_dict() for item in self.items],
            "total": to_float(self.total),
            "display_total": format_money(self.total),
            "total_quantity": self.total_quantity,
            "is_empty": self.is_empty,
        }
