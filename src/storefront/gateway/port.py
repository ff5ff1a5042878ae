"""Payment gateway port (abstract interface).

Checkout hands the customer to a hosted payment page and learns about the
outcome through a signed webhook. Adapters implement both halves so the
domain never talks to a provider SDK directly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class GatewayError(Exception):
    """The payment provider rejected a request or could not be reached."""


class SignatureVerificationError(Exception):
    """A webhook payload did not carry a valid signature."""


@dataclass(frozen=True)
class CheckoutLineItem:
    """One line on the hosted payment page."""

    name: str
    unit_amount: int  # minor currency units
    quantity: int
    currency: str
    image_url: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted checkout session created by the provider."""

    id: str
    url: str


@dataclass(frozen=True)
class GatewayEvent:
    """A verified webhook event."""

    id: str
    type: str
    data: dict = field(default_factory=dict)  # the event's data.object


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        customer_email: str,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
        client_reference_id: str | None = None,
    ) -> CheckoutSession:
        """Create a hosted checkout session and return its redirect target."""
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        """Verify a webhook payload and decode it.

        Raises:
            SignatureVerificationError: if the signature does not match.
        """
        ...
