"""Order aggregate — the immutable record of a completed checkout.

An order captures a price and quantity snapshot of the cart at checkout time,
plus a copy of the catalogue fields needed to display each line (title,
image, category). Later catalogue edits or deletions never change a placed
order. Only ``status`` changes after creation.

Status sequence:
    pending → processing → shipped → delivered

Whether the sequence is enforced depends on the configured policy: ``any``
accepts every recognised status from every state, ``forward_only`` accepts
only moves further along the sequence.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.settings import STATUS_POLICY_ANY, STATUS_POLICY_FORWARD_ONLY
from storefront.shared.money import order_total, to_money


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


_STATUS_SEQUENCE = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]

RECOGNISED_STATUSES = tuple(status.value for status in _STATUS_SEQUENCE)


@storefront.entity(part_of="Order")
class OrderItem:
    """A line of an order: product, quantity and the unit price paid."""

    line_number = Integer(required=True, min_value=1)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    product_title = String(required=True, max_length=255)
    product_image = String(max_length=1000)
    product_category = String(max_length=100)

    @property
    def subtotal(self):
        return float(to_money(self.price) * self.quantity)


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    total_price = Float(required=True, min_value=0.0)
    shipping_address = Text(required=True)
    payment_method = String(required=True, max_length=50)
    idempotency_key = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        """Prices are stored as Float columns. The expected total is summed in
        Decimal and rounded to cents by ``order_total``, so the half-cent
        tolerance only absorbs binary float representation of the stored total.
        """
        if not self.items:
            return
        expected = order_total((item.price, item.quantity) for item in self.items)
        if abs(expected - self.total_price) >= 0.005:
            raise ValidationError({"total_price": [f"Total {self.total_price} does not match items ({expected})"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, lines, shipping_address, payment_method, idempotency_key=None):
        """Create a pending order from checkout lines.

        Args:
            customer_id: The customer placing the order.
            lines: Dicts with product_id, quantity, price (unit price at this
                moment), title, image and category.
            shipping_address: Free-form delivery address.
            payment_method: Payment method label; recorded, never charged.
            idempotency_key: Optional client token identifying the submission.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        items = [
            OrderItem(
                line_number=position,
                product_id=str(line["product_id"]),
                quantity=line["quantity"],
                price=float(to_money(line["price"])),
                product_title=line["title"],
                product_image=line.get("image"),
                product_category=line.get("category"),
            )
            for position, line in enumerate(lines, start=1)
        ]
        total_price = order_total((item.price, item.quantity) for item in items)

        order = cls(
            customer_id=str(customer_id),
            status=OrderStatus.PENDING.value,
            items=items,
            total_price=total_price,
            shipping_address=shipping_address,
            payment_method=payment_method,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                total_price=total_price,
                item_count=len(items),
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def ordered_items(self):
        return sorted(self.items, key=lambda item: item.line_number)

    def is_owned_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status, policy=STATUS_POLICY_ANY):
        """Move the order to ``new_status`` under the given transition policy."""
        if new_status not in RECOGNISED_STATUSES:
            raise ValidationError(
                {"status": [f"Invalid status {new_status!r}; expected one of {', '.join(RECOGNISED_STATUSES)}"]}
            )

        current = OrderStatus(self.status)
        target = OrderStatus(new_status)
        if policy == STATUS_POLICY_FORWARD_ONLY and _STATUS_SEQUENCE.index(target) <= _STATUS_SEQUENCE.index(current):
            raise ValidationError({"status": [f"Cannot move from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
