"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state. The contended product is the
one exception: it is created once at test start and shared by every racer.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated customer's cart and orders."""

    customer_id: str
    product_ids: list[str] = field(default_factory=list)
    entry_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"X-User-Id": self.customer_id}


@dataclass
class ContendedProduct:
    """The low-stock product every racer tries to buy."""

    product_id: str | None = None
    initial_stock: int = 0
    orders_placed: int = 0
    rejected: int = 0


CONTENDED = ContendedProduct()

ADMIN_HEADERS = {"X-User-Id": "loadtest-admin", "X-User-Role": "admin"}
