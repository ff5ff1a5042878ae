"""Shared BDD fixtures and step definitions for the storefront."""

from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from storefront.cart.cart_item import CartItem
from storefront.cart.items import AddToCart
from storefront.cart.listing import cart_subtotal, list_cart


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids by English name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


def _add_to_cart(products, name, quantity, session_id):
    current_domain.process(
        AddToCart(session_id=session_id, product_id=products[name], quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price}'))
def _(make_product, products, name, price):
    products[name] = make_product(name_en=name, price=price)


@given(parsers.cfparse('an out of stock product "{name}" priced {price}'))
def _(make_product, products, name, price):
    products[name] = make_product(name_en=name, price=price, in_stock=False)


@given(parsers.cfparse('{quantity:d} of "{name}" was added to cart "{session_id}"'))
def _(products, quantity, name, session_id):
    _add_to_cart(products, name, quantity, session_id)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{quantity:d} of "{name}" is added to cart "{session_id}"'))
def _(products, quantity, name, session_id, error):
    try:
        _add_to_cart(products, name, quantity, session_id)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('cart "{session_id}" has {count:d} line'))
def _(session_id, count):
    assert len(current_domain.repository_for(CartItem).for_session(session_id)) == count


@then(parsers.cfparse('cart "{session_id}" has {count:d} lines'))
def _(session_id, count):
    assert len(current_domain.repository_for(CartItem).for_session(session_id)) == count


@then(parsers.cfparse('cart "{session_id}" has a subtotal of {amount}'))
def _(session_id, amount):
    assert cart_subtotal(list_cart(session_id)) == Decimal(amount)


@then(parsers.cfparse('the "{name}" line in cart "{session_id}" has quantity {quantity:d}'))
def _(products, name, session_id, quantity):
    lines = [line for line in list_cart(session_id) if line.product.name_en == name]
    assert len(lines) == 1
    assert lines[0].item.quantity == quantity


@then("no error was raised")
def _(error):
    assert error["exc"] is None


@then("the cart rejected the product")
def _(error):
    assert error["exc"] is not None
    assert "product_id" in error["exc"].messages
