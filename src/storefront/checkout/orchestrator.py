"""Checkout boundary — runs order placement and classifies its failures.

Business outcomes (empty cart, insufficient stock, validation, missing
products) propagate unchanged. A version conflict means another unit of work
touched the same products or cart first; placement is re-run so the stock
check happens against fresh state. Conflicts that outlast the retry budget
and database failures surface as a retryable ``TransactionError``. Protean
reports a failed commit as its own ``TransactionError``; raw driver errors can
also escape from reads made before the commit. In every failing case the
unit of work has already been rolled back.
"""

from protean.exceptions import DatabaseError, ExpectedVersionError
from protean.exceptions import TransactionError as UnitOfWorkFailed
from protean.utils.globals import current_domain
from sqlalchemy.exc import DBAPIError

from storefront.checkout.placement import PlaceOrder
from storefront.domain import logger
from storefront.errors import TransactionError
from storefront.order.history import load_order
from storefront.order.order import Order
from storefront.settings import get_settings


def place_order(customer_id, shipping_address, payment_method, idempotency_key=None) -> Order:
    """Check out ``customer_id``'s cart and return the placed order."""
    command = PlaceOrder(
        customer_id=customer_id,
        shipping_address=shipping_address,
        payment_method=payment_method,
        idempotency_key=idempotency_key,
    )
    max_attempts = get_settings().checkout_max_attempts

    for attempt in range(1, max_attempts + 1):
        try:
            order_id = current_domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            logger.warning(
                "Checkout conflicted with a concurrent update",
                customer_id=str(customer_id),
                attempt=attempt,
                max_attempts=max_attempts,
                error=str(exc),
            )
            continue
        except (UnitOfWorkFailed, DatabaseError, DBAPIError) as exc:
            logger.error("Checkout failed in the database", customer_id=str(customer_id), error=str(exc))
            raise TransactionError("Checkout could not be completed, please retry") from exc

        order = load_order(order_id)
        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(customer_id),
            total_price=order.total_price,
            attempts=attempt,
        )
        return order

    raise TransactionError("Checkout kept conflicting with concurrent orders, please retry")
