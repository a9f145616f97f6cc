"""Storage access for cart."""
from eventhub.storage import KeyValueStorage, StorageKeys, create_storage

__all__ = ["KeyValueStorage", "StorageKeys", "create_storage"]
