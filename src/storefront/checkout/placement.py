"""Order placement — command and handler.

The handler is the unit of work for checkout. Protean wraps every command
handler in a ``UnitOfWork``: nothing below is persisted unless the whole
method returns, so an exception anywhere leaves the order uncreated, stock
untouched and the cart as it was.

Stock is decremented on the Product aggregate only when enough is in stock.
Products and the cart are versioned; if another checkout committed a change
to any of them after this one read them, the commit fails with
``ExpectedVersionError`` and the caller re-runs the unit of work against
fresh state (see ``storefront.checkout.orchestrator``).
"""

from datetime import UTC, datetime, timedelta

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, ClearReason
from storefront.cart.items import find_cart
from storefront.domain import storefront
from storefront.errors import EmptyCartError
from storefront.order.order import Order
from storefront.product.management import load_product
from storefront.product.product import Product
from storefront.settings import get_settings


@storefront.command(part_of="Order")
class PlaceOrder:
    """Check out the customer's cart into a new order."""

    customer_id = Identifier(required=True)
    shipping_address = Text(required=True)
    payment_method = String(required=True, max_length=50)
    idempotency_key = String(max_length=255)


def _previous_submission(customer_id, idempotency_key):
    """An order already placed with this key inside the reuse window."""
    previous = current_domain.repository_for(Order).find_by_idempotency_key(customer_id, idempotency_key)
    if previous is None:
        return None

    created_at = previous.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    window = timedelta(minutes=get_settings().idempotency_window_minutes)
    if datetime.now(UTC) - created_at > window:
        return None
    return previous


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        if command.idempotency_key:
            previous = _previous_submission(command.customer_id, command.idempotency_key)
            if previous is not None:
                return str(previous.id)

        cart = find_cart(command.customer_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError(command.customer_id)

        lines = []
        products = []
        for entry in cart.entries:
            product = load_product(entry.product_id)
            # Price is read live: a change since the item was carted is honoured here
            lines.append(
                {
                    "product_id": str(product.id),
                    "quantity": entry.quantity,
                    "price": product.price,
                    "title": product.title,
                    "image": product.image,
                    "category": product.category,
                }
            )
            product.decrement_stock(entry.quantity)
            products.append(product)

        order = Order.place(
            customer_id=command.customer_id,
            lines=lines,
            shipping_address=command.shipping_address,
            payment_method=command.payment_method,
            idempotency_key=command.idempotency_key,
        )
        current_domain.repository_for(Order).add(order)

        product_repo = current_domain.repository_for(Product)
        for product in products:
            product_repo.add(product)

        cart.clear(ClearReason.CHECKOUT)
        current_domain.repository_for(Cart).add(cart)

        return str(order.id)
