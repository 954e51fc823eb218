"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when

from storefront.access import User, require_admin
from storefront.cart.items import find_cart
from storefront.checkout.orchestrator import place_order
from storefront.errors import AccessDenied, EmptyCartError, InsufficientStockError
from storefront.order.history import load_order, orders_for_customer
from storefront.order.status import UpdateOrderStatus
from storefront.product.management import SetStock
from tests.storefront.helpers import add_to_cart, create_product, stock_of


@pytest.fixture()
def context():
    """Scenario state: products by title, the last order and the last error."""
    return {"products": {}, "order": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced {price:f} with {stock:d} in stock'))
def a_product(context, title, price, stock):
    context["products"][title] = create_product(title=title, price=price, stock=stock)


@given(parsers.cfparse('customer "{customer_id}" has {quantity:d} of "{title}" in the cart'))
def customer_has_in_cart(context, customer_id, quantity, title):
    add_to_cart(customer_id, context["products"][title], quantity)


@given(parsers.cfparse('the stock of "{title}" is set to {stock:d}'))
def stock_is_set(context, title, stock):
    command = SetStock(product_id=context["products"][title], stock=stock)
    current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('customer "{customer_id}" checks out'))
@when(parsers.cfparse('customer "{customer_id}" checks out'))
def customer_checks_out(context, customer_id):
    try:
        context["order"] = place_order(
            customer_id=customer_id,
            shipping_address="1 High Street",
            payment_method="card",
        )
        context["error"] = None
    except (EmptyCartError, InsufficientStockError) as exc:
        context["error"] = exc


def _set_status(context, user, status):
    try:
        require_admin(user)
        command = UpdateOrderStatus(order_id=context["order"].id, status=status)
        current_domain.process(command, asynchronous=False)
    except (AccessDenied, ValidationError) as exc:
        context["error"] = exc


@when(parsers.cfparse('an admin sets the order status to "{status}"'))
def admin_sets_status(context, status):
    _set_status(context, User(id="admin-1", is_admin=True), status)


@when(parsers.cfparse('customer "{customer_id}" tries to set the order status to "{status}"'))
def customer_sets_status(context, customer_id, status):
    _set_status(context, User(id=customer_id), status)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the checkout succeeds")
def checkout_succeeds(context):
    assert context["error"] is None
    assert context["order"] is not None


@then(parsers.cfparse("the order total is {total:f}"))
def order_total_is(context, total):
    assert context["order"].total_price == pytest.approx(total)


@then(parsers.cfparse('the order is "{status}"'))
def order_status_is(context, status):
    assert load_order(context["order"].id).status == status


@then(parsers.cfparse('"{title}" has {stock:d} in stock'))
def product_stock_is(context, title, stock):
    assert stock_of(context["products"][title]) == stock


@then(parsers.cfparse('the cart of customer "{customer_id}" is empty'))
def cart_is_empty(customer_id):
    assert find_cart(customer_id).is_empty


@then(parsers.cfparse('the cart of customer "{customer_id}" still has {count:d} {noun}'))
def cart_has_entries(customer_id, count, noun):
    assert len(find_cart(customer_id).entries) == count


@then(parsers.cfparse('customer "{customer_id}" has {count:d} {noun}'))
def customer_has_orders(customer_id, count, noun):
    assert len(orders_for_customer(customer_id)) == count


@then(parsers.cfparse('the checkout fails with insufficient stock for "{title}"'))
def fails_insufficient_stock(context, title):
    assert isinstance(context["error"], InsufficientStockError)
    assert context["error"].product_id == context["products"][title]


@then("the checkout fails because the cart is empty")
def fails_empty_cart(context):
    assert isinstance(context["error"], EmptyCartError)


@then("access is denied")
def access_denied(context):
    assert isinstance(context["error"], AccessDenied)


@then("the status change is rejected")
def status_change_rejected(context):
    assert isinstance(context["error"], ValidationError)
