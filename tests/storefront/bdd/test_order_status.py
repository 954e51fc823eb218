"""BDD tests for order status administration."""

from pytest_bdd import scenarios

scenarios("features/order_status.feature")
