"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str | None
    stripe_webhook_secret: str | None
    frontend_url: str
    currency: str

    @property
    def success_url(self) -> str:
        # {CHECKOUT_SESSION_ID} is substituted by the payment provider
        return f"{self.frontend_url}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.frontend_url}/checkout/cancel"


def get_settings() -> Settings:
    """Build settings from the current environment.

    Read on every call so tests can monkeypatch environment variables.
    """
    return Settings(
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY") or None,
        stripe_webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET") or None,
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:5173").rstrip("/"),
        currency=os.getenv("CHECKOUT_CURRENCY", "cad").lower(),
    )


def is_production() -> bool:
    return os.getenv("PROTEAN_ENV") == "production"
