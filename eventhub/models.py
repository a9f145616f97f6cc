"""
Pydantic Models - Records and Forms

Contains the models exchanged with the events API:
- Read-only records (Category, Ticket, Event, User)
- Login response
- Admin and login form schemas (validated before anything is sent)
"""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from eventhub.errors import ERROR_PHONE_FORMAT
from eventhub.money import parse_decimal


# ============================================================
# Enums
# ============================================================

class EventStatus(str, Enum):
    """Event lifecycle status."""
    ACTIVE = "active"
    POSTPONED = "postponed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


# ============================================================
# Records (owned by the events API)
# ============================================================

class Category(BaseModel):
    """Event category."""
    id: int
    name: str
    event_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "ignore"


class Ticket(BaseModel):
    """Ticket type of an event with its current stock."""
    id: int
    name: str
    price: Decimal = Field(..., ge=0)
    tickets_available: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_decimal(v)


class Event(BaseModel):
    """Event with its embedded ticket types and category."""
    id: int
    name: str
    description: str = ""
    venue: str = ""
    poster: str = ""
    status: EventStatus = EventStatus.ACTIVE
    category_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tickets: list[Ticket] = []
    category: Optional[Category] = None

    class Config:
        extra = "ignore"

    def find_ticket(self, ticket_id: int) -> Optional[Ticket]:
        """Return the ticket type with the given id, or None if the event no longer has it."""
        return next((ticket for ticket in self.tickets if ticket.id == ticket_id), None)


class User(BaseModel):
    """Storefront user."""
    id: int
    name: str
    phone: Optional[str] = None
    email: str
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class LoginResponse(BaseModel):
    """Successful POST /login payload."""
    message: str = ""
    access_token: str
    user: User


class MessageResponse(BaseModel):
    """Generic `{ message }` payload returned by create endpoints."""
    message: str = ""

    class Config:
        extra = "allow"


# ============================================================
# Forms
# ============================================================

PHONE_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$", re.ASCII)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


class EventForm(BaseModel):
    """Admin form for creating or editing an event."""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=10)
    venue: str = Field(..., min_length=1)
    poster: str
    status: EventStatus = EventStatus.ACTIVE
    category_id: int = Field(..., ge=1)
    start_date: datetime
    end_date: datetime

    @field_validator("poster")
    @classmethod
    def validate_poster_url(cls, v: str) -> str:
        if not URL_PATTERN.fullmatch(v):
            raise ValueError("Please enter a valid URL")
        return v

    @model_validator(mode="after")
    def check_date_order(self) -> "EventForm":
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class TicketForm(BaseModel):
    """Admin form for adding a ticket type to an event."""
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=1)
    tickets_available: int = Field(..., ge=1)


class LoginForm(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError("Enter a valid email address")
        return v


class CheckoutForm(BaseModel):
    """Contact details collected on the checkout page."""
    phone: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        if not PHONE_PATTERN.fullmatch(v):
            raise ValueError(ERROR_PHONE_FORMAT)
        return v

