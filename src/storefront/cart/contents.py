"""Cart entries joined with live catalogue data."""

from dataclasses import dataclass
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.items import find_cart
from storefront.product.product import Product


@dataclass(frozen=True)
class CartLine:
    """One cart entry as the customer sees it right now.

    ``product`` is the live Product, or None when it has since been deleted
    from the catalogue.
    """

    entry_id: str
    product_id: str
    quantity: int
    product: Product | None


def cart_lines(customer_id) -> list[CartLine]:
    """Entries of the customer's cart, most recently added first."""
    cart = find_cart(customer_id)
    if cart is None:
        return []

    repo = current_domain.repository_for(Product)
    lines = []
    for entry in sorted(cart.entries, key=lambda e: _sort_key(e.added_at), reverse=True):
        try:
            product = repo.get(str(entry.product_id))
        except ObjectNotFoundError:
            product = None
        lines.append(
            CartLine(
                entry_id=str(entry.id),
                product_id=str(entry.product_id),
                quantity=entry.quantity,
                product=product,
            )
        )
    return lines


def _sort_key(added_at):
    # Stored timestamps may come back naive depending on the provider
    return added_at.replace(tzinfo=None) if added_at else datetime.min
