"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    """Order lookups beyond fetch-by-id. Listings are newest first."""

    def for_customer(self, customer_id) -> list[Order]:
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").all().items

    def everything(self) -> list[Order]:
        return self._dao.query.order_by("-created_at").all().items

    def find_by_idempotency_key(self, customer_id, idempotency_key) -> Order | None:
        return (
            self._dao.query.filter(customer_id=str(customer_id), idempotency_key=idempotency_key)
            .order_by("-created_at")
            .all()
            .first
        )
