"""Cart package: persisted store, ticket selector, checkout reconciliation."""
from .models import LineItem, ReconciledCart
from .reconciler import CartReconciler, CheckoutLoader, CheckoutState
from .selector import TicketSelector
from .store import CartStore, parse_cart

__all__ = [
    "CartStore",
    "CartReconciler",
    "CheckoutLoader",
    "CheckoutState",
    "LineItem",
    "ReconciledCart",
    "TicketSelector",
    "parse_cart",
]
