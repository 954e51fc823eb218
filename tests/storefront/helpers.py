"""Shared setup helpers for storefront tests."""

from protean.utils.globals import current_domain

from storefront.cart.items import AddToCart
from storefront.product.management import CreateProduct
from storefront.product.product import Product


def create_product(**overrides):
    defaults = {"title": "Espresso Cup", "price": 12.5, "stock": 10, "category": "kitchen"}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


def add_to_cart(customer_id, product_id, quantity=1):
    command = AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity)
    return current_domain.process(command, asynchronous=False)


def stock_of(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "admin"}


def customer(user_id="cust-1"):
    """Gateway headers identifying a regular customer."""
    return {"X-User-Id": user_id}
