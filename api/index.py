"""
EventHub Storefront - ASGI entry point.

Run locally with:
    uvicorn api.index:app --reload
"""
from eventhub.app import app

__all__ = ["app"]
