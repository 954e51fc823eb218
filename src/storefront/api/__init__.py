"""Storefront HTTP API package."""

from storefront.api.routes import admin_router, cart_router, order_router, product_router

__all__ = ["cart_router", "order_router", "admin_router", "product_router"]
