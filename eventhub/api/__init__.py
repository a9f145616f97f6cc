"""Events API client."""
from .client import EventsApiClient

__all__ = ["EventsApiClient"]
