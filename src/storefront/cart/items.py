"""Cart entry management — commands and handler.

Every command is scoped to the authenticated customer: the cart addressed is
always ``customer_id``'s own, so an entry id from someone else's cart is
simply not found.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, ClearReason
from storefront.domain import logger, storefront
from storefront.errors import NotFoundError
from storefront.product.management import load_product


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartEntry:
    """Set an entry's quantity; zero or less removes the entry."""

    customer_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    entry_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    customer_id = Identifier(required=True)


def find_cart(customer_id):
    """Return the customer's persisted cart, or None if they never had one."""
    try:
        return current_domain.repository_for(Cart).get(str(customer_id))
    except ObjectNotFoundError:
        return None


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = load_product(command.product_id)
        cart = find_cart(command.customer_id) or Cart.open(command.customer_id)

        entry = cart.add_product(
            product_id=str(product.id),
            quantity=command.quantity,
            available_stock=product.stock,
        )
        current_domain.repository_for(Cart).add(cart)
        return str(entry.id)

    @handle(UpdateCartEntry)
    def update_cart_entry(self, command):
        cart = find_cart(command.customer_id)

        if command.quantity <= 0:
            if cart is not None and cart.discard_entry(command.entry_id):
                current_domain.repository_for(Cart).add(cart)
            return

        entry = cart.entry(command.entry_id) if cart is not None else None
        if entry is None:
            raise NotFoundError("Cart entry", command.entry_id)

        product = load_product(entry.product_id)
        cart.change_quantity(command.entry_id, command.quantity, available_stock=product.stock)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = find_cart(command.customer_id)
        if cart is not None and cart.discard_entry(command.entry_id):
            current_domain.repository_for(Cart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.customer_id)
        if cart is None or cart.is_empty:
            return 0

        removed = cart.clear(ClearReason.REQUESTED)
        current_domain.repository_for(Cart).add(cart)
        logger.info("Cart cleared", customer_id=str(command.customer_id), entry_count=removed)
        return removed
