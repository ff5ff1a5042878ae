"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- StripeGateway when STRIPE_SECRET_KEY is configured
- FakeGateway otherwise (development and testing), signed with its own
  test secret rather than the provider's webhook secret
"""

from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import PaymentGateway
from storefront.utils.settings import get_settings

_current_gateway: PaymentGateway | None = None


def _default_gateway() -> PaymentGateway:
    settings = get_settings()
    if settings.stripe_secret_key:
        from storefront.gateway.stripe_adapter import StripeGateway

        return StripeGateway(
            api_key=settings.stripe_secret_key,
            webhook_secret=settings.stripe_webhook_secret,
        )
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building the default on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _default_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
