"""Application tests for order status administration and order reads."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.access import User
from storefront.checkout.orchestrator import place_order
from storefront.errors import AccessDenied, NotFoundError
from storefront.order.history import all_orders, load_order, order_for
from storefront.order.status import UpdateOrderStatus
from tests.storefront.helpers import add_to_cart, create_product


@pytest.fixture()
def order():
    add_to_cart("cust-1", create_product(stock=5), 1)
    return place_order(customer_id="cust-1", shipping_address="1 High Street", payment_method="card")


def _set_status(order_id, status):
    return current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestUpdateOrderStatus:
    def test_update_status(self, order):
        assert _set_status(order.id, "shipped") == "shipped"
        assert load_order(order.id).status == "shipped"

    def test_any_status_reachable_from_any_status(self, order):
        _set_status(order.id, "delivered")
        _set_status(order.id, "pending")
        assert load_order(order.id).status == "pending"

    def test_unknown_status(self, order):
        with pytest.raises(ValidationError):
            _set_status(order.id, "teleported")
        assert load_order(order.id).status == "pending"

    def test_missing_order(self):
        with pytest.raises(NotFoundError):
            _set_status("missing", "shipped")

    def test_forward_only_policy(self, order, settings_env):
        settings_env(ORDER_STATUS_POLICY="forward_only")
        _set_status(order.id, "shipped")

        with pytest.raises(ValidationError):
            _set_status(order.id, "processing")
        assert load_order(order.id).status == "shipped"

    def test_status_change_leaves_snapshot_untouched(self, order):
        _set_status(order.id, "processing")
        reloaded = load_order(order.id)
        assert reloaded.total_price == pytest.approx(order.total_price)
        assert len(reloaded.items) == 1


class TestOrderReads:
    def test_owner_can_read(self, order):
        assert order_for(order.id, User(id="cust-1")).id == order.id

    def test_admin_can_read_any_order(self, order):
        assert order_for(order.id, User(id="admin-1", is_admin=True)).id == order.id

    def test_other_customer_denied(self, order):
        with pytest.raises(AccessDenied):
            order_for(order.id, User(id="cust-2"))

    def test_all_orders(self, order):
        assert [o.id for o in all_orders()] == [order.id]
