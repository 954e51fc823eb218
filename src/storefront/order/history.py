"""Order reads with ownership checks applied."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.access import User, ensure_owner_or_admin
from storefront.errors import NotFoundError
from storefront.order.order import Order


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundError("Order", order_id) from None


def order_for(order_id, user: User) -> Order:
    """Fetch an order the user may see: their own, or any order for admins."""
    order = load_order(order_id)
    ensure_owner_or_admin(user, order.customer_id, f"Order {order_id}")
    return order


def orders_for_customer(customer_id) -> list[Order]:
    return current_domain.repository_for(Order).for_customer(customer_id)


def all_orders() -> list[Order]:
    return current_domain.repository_for(Order).everything()
