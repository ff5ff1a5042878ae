"""Order intent and its metadata encoding.

The order intent is everything needed to record an order once payment
succeeds: customer contact, shipping address, total and the purchased lines.
It travels through the payment provider as checkout-session metadata, which
only holds short string values, so the JSON form is split into fixed-size
chunks under ``order_0 .. order_n`` with ``order_chunks`` giving the count.
"""

import json
from decimal import Decimal

import structlog
from pydantic import BaseModel, Field, ValidationError

logger = structlog.get_logger(__name__)

CHUNK_SIZE = 500  # provider limit on a metadata value
MAX_METADATA_KEYS = 50  # provider limit on metadata keys
CHUNK_PREFIX = "order_"
CHUNK_COUNT_KEY = "order_chunks"


class IntentTooLarge(ValueError):
    """The order intent does not fit in the provider's metadata."""


class IntentLine(BaseModel):
    product_id: str
    name_en: str
    name_fr: str
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    image_url: str | None = None


class OrderIntent(BaseModel):
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    shipping_address: str
    shipping_city: str
    shipping_postal_code: str
    shipping_country: str
    total: Decimal = Field(ge=0, decimal_places=2)
    items: list[IntentLine] = Field(min_length=1)
    cart_session_id: str | None = None

    def shipping(self) -> dict:
        return {
            "street": self.shipping_address,
            "city": self.shipping_city,
            "postal_code": self.shipping_postal_code,
            "country": self.shipping_country,
        }

    def order_lines(self) -> list[dict]:
        return [line.model_dump() for line in self.items]


def encode_metadata(intent: OrderIntent) -> dict[str, str]:
    """Split the intent's JSON form into provider metadata entries.

    Raises:
        IntentTooLarge: if the chunks plus the count key exceed the key limit.
    """
    payload = intent.model_dump_json(exclude_none=True)
    chunks = [payload[i : i + CHUNK_SIZE] for i in range(0, len(payload), CHUNK_SIZE)]
    if len(chunks) + 1 > MAX_METADATA_KEYS:
        raise IntentTooLarge(f"Order is too large to check out ({len(payload)} characters of order data)")

    metadata = {f"{CHUNK_PREFIX}{index}": chunk for index, chunk in enumerate(chunks)}
    metadata[CHUNK_COUNT_KEY] = str(len(chunks))
    return metadata


def decode_metadata(metadata: dict | None) -> OrderIntent | None:
    """Reassemble an order intent from provider metadata.

    Returns None when the metadata is absent, incomplete or does not describe
    a valid intent.
    """
    if not metadata:
        return None

    try:
        count = int(metadata.get(CHUNK_COUNT_KEY, ""))
    except ValueError:
        logger.warning("Order metadata has no usable chunk count", keys=sorted(metadata))
        return None

    parts = []
    for index in range(count):
        chunk = metadata.get(f"{CHUNK_PREFIX}{index}")
        if chunk is None:
            logger.warning("Order metadata chunk missing", index=index, expected=count)
            return None
        parts.append(chunk)

    try:
        return OrderIntent.model_validate(json.loads("".join(parts)))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Order metadata does not describe a valid order", error=str(exc))
        return None
