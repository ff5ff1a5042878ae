"""FastAPI endpoints for the storefront: catalogue, cart, checkout, webhook and orders."""

import json

import structlog
from fastapi import APIRouter, Header, HTTPException, Query, Request
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemIdResponse,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    ClearCartResponse,
    ConfigureGatewayRequest,
    CreateProductRequest,
    GatewayConfigResponse,
    OrderResponse,
    ProductIdResponse,
    ProductResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    WebhookAck,
)
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity, add_item
from storefront.cart.listing import cart_subtotal, list_cart
from storefront.catalogue.management import AddProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.checkout.confirmation import process_gateway_event
from storefront.checkout.intent import IntentLine, IntentTooLarge, OrderIntent
from storefront.checkout.orchestrator import start_checkout
from storefront.gateway import get_gateway
from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import GatewayError, SignatureVerificationError
from storefront.order.order import Order
from storefront.order.status import UpdateOrderStatus
from storefront.utils.settings import is_production

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None, featured: bool | None = None) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).listing(category=category, featured=featured)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse.from_product(product)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name_en=body.name_en,
        name_fr=body.name_fr,
        description_en=body.description_en,
        description_fr=body.description_fr,
        price=str(body.price),
        category=body.category,
        image_url=body.image_url,
        image_urls=json.dumps(body.image_urls) if body.image_urls is not None else None,
        in_stock=body.in_stock,
        featured=body.featured,
        dimensions=body.dimensions,
        materials=body.materials,
        care_instructions=body.care_instructions,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name_en=body.name_en,
        name_fr=body.name_fr,
        description_en=body.description_en,
        description_fr=body.description_fr,
        price=str(body.price) if body.price is not None else None,
        category=body.category,
        image_url=body.image_url,
        image_urls=json.dumps(body.image_urls) if body.image_urls is not None else None,
        in_stock=body.in_stock,
        featured=body.featured,
        dimensions=body.dimensions,
        materials=body.materials,
        care_instructions=body.care_instructions,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_cart(session_id: str) -> CartResponse:
    lines = list_cart(session_id)
    return CartResponse(
        session_id=session_id,
        items=[
            CartLineResponse(
                id=str(line.item.id),
                session_id=line.item.session_id,
                product_id=str(line.item.product_id),
                quantity=line.item.quantity,
                subtotal=str(line.subtotal),
                product=ProductResponse.from_product(line.product),
            )
            for line in lines
        ],
        subtotal=str(cart_subtotal(lines)),
    )


@cart_router.post("", status_code=201, response_model=CartItemIdResponse)
async def add_to_cart(body: AddToCartRequest) -> CartItemIdResponse:
    command = AddToCart(
        session_id=body.session_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    item_id = add_item(command)
    return CartItemIdResponse(item_id=item_id)


@cart_router.patch("/{item_id}", response_model=StatusResponse)
async def update_cart_item(item_id: str, body: UpdateCartItemRequest) -> StatusResponse:
    command = UpdateCartQuantity(item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="removed" if body.quantity < 1 else "updated")


@cart_router.delete("/session/{session_id}", response_model=ClearCartResponse)
async def clear_cart(session_id: str) -> ClearCartResponse:
    removed = current_domain.process(ClearCart(session_id=session_id), asynchronous=False)
    return ClearCartResponse(removed=removed or 0)


@cart_router.delete("/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str) -> StatusResponse:
    current_domain.process(RemoveFromCart(item_id=item_id), asynchronous=False)
    return StatusResponse(status="removed")


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/api", tags=["checkout"])


@checkout_router.post("/create-checkout-session", response_model=CheckoutResponse)
async def create_checkout_session(body: CheckoutRequest) -> CheckoutResponse:
    """Hand the customer over to the hosted payment page."""
    intent = OrderIntent(
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        customer_phone=body.customer_phone,
        shipping_address=body.shipping_address,
        shipping_city=body.shipping_city,
        shipping_postal_code=body.shipping_postal_code,
        shipping_country=body.shipping_country,
        total=body.total,
        items=[IntentLine(**item.model_dump()) for item in body.items],
        cart_session_id=body.session_id,
    )
    try:
        session = start_checkout(intent)
    except IntentTooLarge as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except GatewayError as exc:
        logger.error("Checkout session could not be created", error=str(exc))
        raise HTTPException(
            status_code=502,
            detail="The payment service is unavailable right now. Please try again in a moment.",
        ) from exc
    return CheckoutResponse(url=session.url)


@checkout_router.post("/checkout/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    Lets manual API testing toggle whether checkout sessions can be created.
    """
    if is_production():
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )


# ---------------------------------------------------------------------------
# Webhook Router
# ---------------------------------------------------------------------------
webhook_router = APIRouter(tags=["webhook"])


@webhook_router.post("/webhook", response_model=WebhookAck)
async def receive_webhook(
    request: Request,
    stripe_signature: str = Header(default="", alias="Stripe-Signature"),
) -> WebhookAck:
    """Payment provider callback. The raw body is needed to check the signature."""
    payload = await request.body()
    try:
        event = get_gateway().construct_event(payload, stripe_signature)
    except SignatureVerificationError as exc:
        logger.warning("Rejected webhook with invalid signature", error=str(exc))
        raise HTTPException(status_code=400, detail="Invalid webhook signature") from exc

    process_gateway_event(event)
    return WebhookAck()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
) -> list[OrderResponse]:
    """Orders newest first. Every order is returned unless ``limit`` is given."""
    orders = current_domain.repository_for(Order).newest_first(offset=offset, limit=limit)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/by-checkout-session/{checkout_session_id}", response_model=OrderResponse)
async def get_order_by_checkout_session(checkout_session_id: str) -> OrderResponse:
    """Lets the checkout success page show the order once the webhook has landed."""
    order = current_domain.repository_for(Order).find_by_checkout_session(checkout_session_id)
    if order is None:
        raise HTTPException(status_code=404, detail="No order recorded for this checkout session yet")
    return OrderResponse.from_order(order)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


@order_router.patch("/{order_id}", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))
