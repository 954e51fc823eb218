"""Order status administration."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.history import load_order
from storefront.order.order import Order
from storefront.settings import get_settings


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    """Set an order's status. Callers must already be authorised as admins."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order = load_order(command.order_id)
        previous = order.status
        order.change_status(command.status, policy=get_settings().order_status_policy)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )
        return order.status
