"""
Storefront API Pydantic Models

Request bodies shared by the storefront endpoints.
"""
from decimal import Decimal

from pydantic import BaseModel, Field

from eventhub.models import TicketForm


# ==================== CART MODELS ====================

class SelectorRequest(BaseModel):
    """Ticket as rendered on the event page; the ceiling is not re-checked."""
    ticket_name: str = ""
    unit_price: Decimal = Decimal("0")
    stock_ceiling: int = Field(..., ge=0)


# ==================== CHECKOUT MODELS ====================

class CheckoutRequest(BaseModel):
    phone: str = ""


# ==================== ADMIN MODELS ====================

class CreateTicketRequest(TicketForm):
    event_id: int = Field(..., ge=1)
