"""
Checkout Submission

Validates the contact phone number, hands the order to the order-placement
collaborator and clears the cart once the order is accepted.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import ValidationError

from eventhub.cart import CartReconciler, CartStore, LineItem, ReconciledCart
from eventhub.errors import (
    CartLoadError,
    TransportError,
    ERROR_CART_EMPTY,
    ERROR_LOAD_CART,
    ERROR_PHONE_FORMAT,
    ERROR_SUBMISSION_IN_FLIGHT,
)
from eventhub.logging import get_logger, mask_phone_for_logging
from eventhub.models import CheckoutForm, PHONE_PATTERN
from eventhub.money import format_money

logger = get_logger(__name__)


def validate_phone(phone: str) -> bool:
    """International format: '+', a digit 1-9, then 1 to 14 more digits."""
    return bool(PHONE_PATTERN.fullmatch(phone or ""))


@dataclass
class OrderRequest:
    """What gets sent to the order-placement collaborator."""
    phone: str
    items: list[LineItem]
    total: Decimal


class OrderPlacer(ABC):
    """Interface for the external order/payment collaborator."""

    @abstractmethod
    async def place_order(self, order: OrderRequest) -> str:
        """
        Place the order.

        Returns:
            Confirmation message for the user

        Raises:
            TransportError: The order could not be placed
        """
        ...


class LoggingOrderPlacer(OrderPlacer):
    """Stub collaborator: logs the order and confirms it."""

    async def place_order(self, order: OrderRequest) -> str:
        logger.info(
            f"Order placed: {len(order.items)} line item(s), total {format_money(order.total)}, "
            f"phone {mask_phone_for_logging(order.phone)}"
        )
        return f"Order placed! Phone: {order.phone}"


class SubmissionStatus(str, Enum):
    PLACED = "placed"
    INVALID = "invalid"
    EMPTY_CART = "empty_cart"
    IN_FLIGHT = "in_flight"


@dataclass
class SubmissionResult:
    status: SubmissionStatus
    message: str = ""
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def placed(self) -> bool:
        return self.status == SubmissionStatus.PLACED


class CheckoutSubmission:
    """
    Checkout form handler.

    submit() is a no-op while the cart is empty or a previous submit is
    still awaiting the order placer. The cart is cleared only after the
    order placer succeeds; there is no undo.
    """

    def __init__(self, store: CartStore, order_placer: Optional[OrderPlacer] = None):
        self._store = store
        self._order_placer = order_placer or LoggingOrderPlacer()
        self._in_flight = False

    @property
    def is_submitting(self) -> bool:
        return self._in_flight

    def can_submit(self, cart: ReconciledCart) -> bool:
        return not cart.is_empty and not self._in_flight

    @staticmethod
    def validate(phone: str) -> dict[str, str]:
        """Field errors for the form, empty when valid."""
        try:
            CheckoutForm(phone=phone)
        except ValidationError:
            return {"phone": ERROR_PHONE_FORMAT}
        return {}

    async def submit(self, cart: ReconciledCart, phone: str) -> SubmissionResult:
        """
        Submit the checkout form for an already reconciled cart.

        Raises:
            TransportError: The order placer failed; the cart is left intact
        """
        if cart.is_empty:
            return SubmissionResult(SubmissionStatus.EMPTY_CART, ERROR_CART_EMPTY)
        if self._in_flight:
            return SubmissionResult(SubmissionStatus.IN_FLIGHT, ERROR_SUBMISSION_IN_FLIGHT)

        errors = self.validate(phone)
        if errors:
            return SubmissionResult(SubmissionStatus.INVALID, ERROR_PHONE_FORMAT, errors)

        self._in_flight = True
        try:
            return await self._place(cart, phone)
        finally:
            self._in_flight = False

    async def reconcile_and_submit(self, reconciler: CartReconciler, phone: str) -> SubmissionResult:
        """
        Reconcile the persisted cart and submit it under one in-flight guard.

        The guard is taken before the event fetch, so a second submit that
        arrives while the cart is still being priced is rejected.

        Raises:
            CartLoadError: The cart could not be reconciled
            TransportError: The order placer failed; the cart is left intact
        """
        if self._in_flight:
            return SubmissionResult(SubmissionStatus.IN_FLIGHT, ERROR_SUBMISSION_IN_FLIGHT)

        errors = self.validate(phone)
        if errors:
            return SubmissionResult(SubmissionStatus.INVALID, ERROR_PHONE_FORMAT, errors)

        self._in_flight = True
        try:
            try:
                cart = await reconciler.reconcile()
            except TransportError as e:
                raise CartLoadError(ERROR_LOAD_CART) from e
            if cart.is_empty:
                return SubmissionResult(SubmissionStatus.EMPTY_CART, ERROR_CART_EMPTY)
            return await self._place(cart, phone)
        finally:
            self._in_flight = False

    async def _place(self, cart: ReconciledCart, phone: str) -> SubmissionResult:
        message = await self._order_placer.place_order(
            OrderRequest(phone=phone, items=list(cart.items), total=cart.total)
        )
        self._store.clear()
        return SubmissionResult(SubmissionStatus.PLACED, message)
