"""Storefront: product inventory, shopping carts and order checkout."""
