"""
Configuration

Settings are read from the environment (a local .env file is loaded first
when present). Every value has a development default so the storefront
runs against a local events API without any setup.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path.cwd() / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


CART_BACKENDS = ("memory", "file", "redis")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the storefront."""

    api_url: str = "http://localhost:5000"
    http_timeout: float = 10.0
    cart_backend: str = "file"
    cart_file: str = ".eventhub/storage.json"
    cart_ttl: int = 0  # seconds, 0 = keep forever
    redis_url: str = ""
    redis_token: str = ""

    def __post_init__(self):
        if self.cart_backend not in CART_BACKENDS:
            raise ValueError(
                f"EVENTHUB_CART_BACKEND must be one of {', '.join(CART_BACKENDS)}, "
                f"got {self.cart_backend!r}"
            )
        if self.cart_backend == "redis" and not (self.redis_url and self.redis_token):
            raise ValueError(
                "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set for the redis cart backend"
            )


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        api_url=os.environ.get("EVENTHUB_API_URL", "http://localhost:5000").rstrip("/"),
        http_timeout=float(os.environ.get("EVENTHUB_HTTP_TIMEOUT", "10")),
        cart_backend=os.environ.get("EVENTHUB_CART_BACKEND", "file").lower(),
        cart_file=os.environ.get("EVENTHUB_CART_FILE", ".eventhub/storage.json"),
        cart_ttl=int(os.environ.get("EVENTHUB_CART_TTL", "0")),
        redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
        redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get process-wide settings (cached)."""
    return load_settings()
