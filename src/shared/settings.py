"""Application settings read from the environment.

Protean's own configuration (databases, event store, processing mode) lives
under ``[tool.protean]`` in pyproject.toml. These are the storefront-level knobs.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    currency: str = "USD"
    cart_key: str = "cart"
    cart_dir: str | None = None
    image_base_url: str = "https://storage.local/products"
    paypal_client_id: str | None = None
    paypal_client_secret: str | None = None
    log_dir: str | None = None
    session_limit: int = 1000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            currency=os.getenv("STOREFRONT_CURRENCY", "USD").upper(),
            cart_key=os.getenv("STOREFRONT_CART_KEY", "cart"),
            cart_dir=os.getenv("STOREFRONT_CART_DIR") or None,
            image_base_url=os.getenv("STOREFRONT_IMAGE_BASE_URL", "https://storage.local/products").rstrip("/"),
            paypal_client_id=os.getenv("PAYPAL_CLIENT_ID") or None,
            paypal_client_secret=os.getenv("PAYPAL_CLIENT_SECRET") or None,
            log_dir=os.getenv("LOG_DIR") or None,
            session_limit=int(os.getenv("STOREFRONT_SESSION_LIMIT", "1000")),
        )


def get_settings() -> Settings:
    """Return settings for the current process environment."""
    return Settings.from_env()
