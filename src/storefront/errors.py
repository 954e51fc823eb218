"""Business outcomes of cart, checkout and order operations.

Malformed input is reported with Protean's ``ValidationError``; the classes
below cover the remaining typed outcomes callers are expected to handle.
"""


class StorefrontError(Exception):
    """Base class for storefront business errors."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class NotFoundError(StorefrontError):
    """A referenced product, cart entry or order does not exist."""

    def __init__(self, kind, identifier):
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = str(identifier)


class AccessDenied(StorefrontError):
    """The caller does not own the resource or lacks the required privilege."""


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds the stock currently available for a product."""

    def __init__(self, product_id, requested, available, title=None):
        name = title or product_id
        super().__init__(f"Not enough stock for {name}: {available} available, {requested} requested")
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available
        self.title = title

    def to_dict(self):
        return {
            "error": self.message,
            "product_id": self.product_id,
            "requested": self.requested,
            "available": self.available,
        }


class EmptyCartError(StorefrontError):
    """Checkout was attempted with no entries in the cart."""

    def __init__(self, customer_id):
        super().__init__("Cart is empty")
        self.customer_id = str(customer_id)


class TransactionError(StorefrontError):
    """The unit of work failed for infrastructure reasons and was rolled back.

    Always retryable: nothing from the failed attempt was persisted.
    """

    retryable = True

    def to_dict(self):
        return {"error": self.message, "retryable": self.retryable}
