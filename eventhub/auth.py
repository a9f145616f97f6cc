"""
Session Storage

The access token and user blob written on login. They are opaque to the
rest of the storefront: a user blob that fails to parse simply means
"not logged in".
"""
import json
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from eventhub.logging import get_logger
from eventhub.models import LoginResponse, User
from eventhub.storage import KeyValueStorage, StorageKeys

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    user: Optional[User] = None
    access_token: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None and bool(self.access_token)

    @property
    def is_admin(self) -> bool:
        return self.is_logged_in and self.user.is_admin

    @property
    def landing_path(self) -> str:
        """Where to send the user after login."""
        return "/dashboard" if self.is_admin else "/"


class SessionStore:
    """Reads and writes the login artifacts."""

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def load(self) -> Session:
        user = None
        raw_user = self._storage.get(StorageKeys.USER)
        if raw_user:
            try:
                user = User.model_validate(json.loads(raw_user))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning(f"Ignoring unreadable stored user: {e}")
        return Session(user=user, access_token=self._storage.get(StorageKeys.ACCESS_TOKEN))

    def access_token(self) -> Optional[str]:
        return self._storage.get(StorageKeys.ACCESS_TOKEN)

    def save(self, login: LoginResponse) -> Session:
        self._storage.set(StorageKeys.ACCESS_TOKEN, login.access_token)
        self._storage.set(StorageKeys.USER, login.user.model_dump_json())
        return Session(user=login.user, access_token=login.access_token)

    def clear(self) -> None:
        self._storage.delete(StorageKeys.ACCESS_TOKEN)
        self._storage.delete(StorageKeys.USER)
