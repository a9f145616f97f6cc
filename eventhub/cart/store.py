"""Cart store: the persisted event -> ticket -> quantity map."""
import json
from typing import Optional

from eventhub.logging import get_logger, sanitize_id_for_logging
from .storage import KeyValueStorage, StorageKeys

logger = get_logger(__name__)

# {"<event id>": {"<ticket id>": quantity}}
CartData = dict[str, dict[str, int]]


def _is_id_key(key) -> bool:
    return isinstance(key, str) and key.isascii() and key.isdigit()


def _canonical(key: str) -> str:
    return str(int(key))


def _is_quantity(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_cart(raw: Optional[str]) -> CartData:
    """
    Deserialize the persisted cart.

    Anything that is not an object of objects of integer quantities keyed by
    numeric ids is treated as an empty cart. Keys are normalised ("01" is
    "1") and entries that collide are merged by adding their quantities.
    Non-positive quantities and emptied events are pruned.
    """
    if not raw:
        return {}

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Corrupted cart data, treating as empty: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning("Corrupted cart data (not an object), treating as empty")
        return {}

    cart: CartData = {}
    for event_key, tickets in data.items():
        if not _is_id_key(event_key) or not isinstance(tickets, dict):
            logger.warning("Corrupted cart data (bad event entry), treating as empty")
            return {}
        for ticket_key, quantity in tickets.items():
            if not _is_id_key(ticket_key) or not _is_quantity(quantity):
                logger.warning("Corrupted cart data (bad ticket entry), treating as empty")
                return {}
            if quantity > 0:
                quantities = cart.setdefault(_canonical(event_key), {})
                ticket = _canonical(ticket_key)
                quantities[ticket] = quantities.get(ticket, 0) + quantity
    return cart


class CartStore:
    """
    Reads and writes the cart under the `ticketCart` storage key.

    Every mutation is a full read-modify-write of the serialized structure.
    This is only race-free with a single writer (one UI thread / one
    process); concurrent writers would need a lock around set().
    """

    def __init__(self, storage: KeyValueStorage, key: str = StorageKeys.TICKET_CART):
        self._storage = storage
        self.key = key

    def load(self) -> CartData:
        """Return the full persisted cart in stored order."""
        return parse_cart(self._storage.get(self.key))

    def _save(self, cart: CartData) -> None:
        self._storage.set(self.key, json.dumps(cart))

    def get(self, event_id: int, ticket_id: int) -> int:
        """Selected quantity for a ticket type, 0 if absent."""
        return self.load().get(str(event_id), {}).get(str(ticket_id), 0)

    def set(self, event_id: int, ticket_id: int, quantity: int) -> None:
        """
        Upsert a quantity; 0 or less removes the entry (and an emptied event).

        Removing a ticket that is not in the cart writes nothing, so the
        storage key is only created by the first real selection.
        """
        cart = self.load()
        event_key, ticket_key = str(event_id), str(ticket_id)

        if quantity <= 0:
            tickets = cart.get(event_key)
            if tickets is None or ticket_key not in tickets:
                return
            del tickets[ticket_key]
            if not tickets:
                del cart[event_key]
        else:
            cart.setdefault(event_key, {})[ticket_key] = int(quantity)

        self._save(cart)
        logger.debug(
            f"Cart set event={sanitize_id_for_logging(event_key)} "
            f"ticket={sanitize_id_for_logging(ticket_key)} quantity={max(quantity, 0)}"
        )

    def clear(self) -> None:
        """Remove the whole cart."""
        self._storage.delete(self.key)
        logger.debug("Cart cleared")

    def is_empty(self) -> bool:
        return not self.load()
