"""Tests for the Order aggregate: placement snapshot and status changes."""

import pytest
from protean.exceptions import ValidationError

from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import RECOGNISED_STATUSES, Order, OrderItem, OrderStatus
from storefront.settings import STATUS_POLICY_FORWARD_ONLY


def _lines():
    return [
        {"product_id": "prod-1", "quantity": 3, "price": 19.99, "title": "Mug", "image": "mug.jpg", "category": "kitchen"},
        {"product_id": "prod-2", "quantity": 1, "price": 0.01, "title": "Sticker"},
    ]


def _order(**overrides):
    defaults = {
        "customer_id": "cust-001",
        "lines": _lines(),
        "shipping_address": "1 High Street",
        "payment_method": "card",
    }
    defaults.update(overrides)
    order = Order.place(**defaults)
    order._events.clear()
    return order


class TestOrderPlacement:
    def test_place_order(self):
        order = Order.place(
            customer_id="cust-001",
            lines=_lines(),
            shipping_address="1 High Street",
            payment_method="card",
            idempotency_key="key-1",
        )

        assert order.status == OrderStatus.PENDING.value
        assert order.customer_id == "cust-001"
        assert order.total_price == pytest.approx(59.98)
        assert order.idempotency_key == "key-1"
        assert len(order.items) == 2

        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 2
        assert event.total_price == pytest.approx(59.98)

    def test_items_keep_checkout_order_and_snapshot(self):
        order = _order()
        first, second = order.ordered_items

        assert first.line_number == 1
        assert first.product_id == "prod-1"
        assert first.product_title == "Mug"
        assert first.product_image == "mug.jpg"
        assert first.product_category == "kitchen"
        assert first.subtotal == pytest.approx(59.97)
        assert second.line_number == 2
        assert second.product_image is None

    def test_place_requires_lines(self):
        with pytest.raises(ValidationError):
            _order(lines=[])

    def test_total_must_match_items(self):
        with pytest.raises(ValidationError) as exc:
            Order(
                customer_id="cust-001",
                items=[OrderItem(line_number=1, product_id="p", quantity=2, price=5.0, product_title="P")],
                total_price=11.0,
                shipping_address="1 High Street",
                payment_method="card",
            )
        assert "total_price" in exc.value.messages

    def test_float_total_within_a_cent_is_accepted(self):
        order = Order(
            customer_id="cust-001",
            items=[OrderItem(line_number=1, product_id="p", quantity=3, price=0.1, product_title="P")],
            total_price=0.1 * 3,
            shipping_address="1 High Street",
            payment_method="card",
        )
        assert order.total_price == pytest.approx(0.3)

    def test_ownership(self):
        order = _order()
        assert order.is_owned_by("cust-001")
        assert not order.is_owned_by("cust-002")


class TestOrderStatus:
    @pytest.mark.parametrize("status", RECOGNISED_STATUSES)
    def test_any_policy_accepts_every_status(self, status):
        order = _order()
        order.change_status("delivered")
        order.change_status(status)
        assert order.status == status

    def test_status_change_raises_event(self):
        order = _order()
        order.change_status("shipped")

        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "shipped"

    def test_unknown_status_rejected(self):
        order = _order()
        with pytest.raises(ValidationError) as exc:
            order.change_status("lost")
        assert "status" in exc.value.messages
        assert order.status == "pending"

    def test_forward_only_accepts_forward_moves(self):
        order = _order()
        order.change_status("processing", policy=STATUS_POLICY_FORWARD_ONLY)
        order.change_status("delivered", policy=STATUS_POLICY_FORWARD_ONLY)
        assert order.status == "delivered"

    @pytest.mark.parametrize("target", ["pending", "processing", "shipped"])
    def test_forward_only_rejects_backward_and_same(self, target):
        order = _order()
        order.change_status("shipped")
        with pytest.raises(ValidationError):
            order.change_status(target, policy=STATUS_POLICY_FORWARD_ONLY)
        assert order.status == "shipped"
