"""
Storage Module - Client-side Key/Value Backends

The storefront keeps its state (cart, session) the way a browser keeps
localStorage: string values under a handful of well-known keys. Backends:
- In-memory dict (tests, ephemeral sessions)
- JSON file on disk (default, survives restarts)
- Upstash Redis (shared/remote persistence)

All backends are synchronous; callers never suspend on a storage access.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from upstash_redis import Redis

from eventhub.config import Settings, get_settings
from eventhub.logging import get_logger

logger = get_logger(__name__)


class StorageKeys:
    """Well-known storage keys."""

    TICKET_CART = "ticketCart"
    ACCESS_TOKEN = "access_token"
    USER = "user"


class KeyValueStorage(ABC):
    """Interface for string key/value persistence.

    Backends must be swappable; values are opaque strings.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store the value, replacing any previous one."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key; absent keys are ignored."""
        ...


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for a single process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """
    All keys in one JSON document on disk.

    The whole document is rewritten on every write (temp file + rename),
    so a crash mid-write leaves the previous version in place.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable storage file {self.path}, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} is not a JSON object, starting empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class RedisStorage(KeyValueStorage):
    """Upstash Redis storage; keys are namespaced with a prefix."""

    def __init__(self, client: Redis, prefix: str = "eventhub:", ttl: int = 0):
        self._redis = client
        self.prefix = prefix
        self.ttl = ttl

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self._redis.get(self._key(key))
        return value if value else None

    def set(self, key: str, value: str) -> None:
        if self.ttl > 0:
            self._redis.set(self._key(key), value, ex=self.ttl)
        else:
            self._redis.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._redis.delete(self._key(key))


def create_storage(settings: Optional[Settings] = None) -> KeyValueStorage:
    """Build the storage backend selected by configuration."""
    settings = settings or get_settings()

    if settings.cart_backend == "memory":
        return MemoryStorage()
    if settings.cart_backend == "redis":
        client = Redis(url=settings.redis_url, token=settings.redis_token)
        return RedisStorage(client, ttl=settings.cart_ttl)
    return JsonFileStorage(settings.cart_file)
