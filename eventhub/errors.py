"""
Common Error Constants and Exceptions

Centralized error messages shared by the API client, the checkout flow
and the HTTP routers.
"""

# Transport errors
ERROR_FETCH_EVENTS = "Failed to fetch events"
ERROR_LOAD_CART = "Failed to load cart items. Please try again."
ERROR_PLACE_ORDER = "Failed to place order. Please try again."

# API errors
ERROR_CREATE_TICKET = "Failed to create ticket"
ERROR_CREATE_EVENT = "Failed to create event"
ERROR_LOGIN = "Unable to login"
ERROR_FETCH_CATEGORIES = "Failed to fetch categories"
ERROR_FETCH_USERS = "Failed to fetch users"

# Checkout errors
ERROR_CART_EMPTY = "Your cart is empty"
ERROR_SUBMISSION_IN_FLIGHT = "Order submission already in progress"
ERROR_PHONE_FORMAT = "Phone number must be in international format (e.g. +254712345678)"

# Auth errors
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_ADMIN_REQUIRED = "Admin access required"

# Generic errors
ERROR_INTERNAL = "Internal server error"


class EventHubError(Exception):
    """Base error for failures surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(EventHubError):
    """The events API could not be reached or returned an unusable response."""


class ApiError(TransportError):
    """The events API answered with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class CartLoadError(TransportError):
    """The persisted cart could not be priced against live event data."""
