"""Storefront Load Testing — Locust entry point.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Contention only, headless:
    locust -f loadtests/locustfile.py LastUnitRaceUser --headless \
           -u 50 -r 50 -t 60s --host http://localhost:8000

The race scenario seeds one product with CONTENDED_STOCK units at start and
checks at the end that the stock never went below zero and that no more
orders were placed than there were units.
"""

import logging
import os
import time

import requests
from locust import events

from loadtests.data_generators import product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ADMIN_HEADERS, CONTENDED
from loadtests.scenarios.checkout import LastUnitRaceUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")

CONTENDED_STOCK = int(os.environ.get("CONTENDED_STOCK", "5"))


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 500:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Seed the contended product."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")

    response = requests.post(
        f"{environment.host}/products",
        json=product_data(stock=CONTENDED_STOCK),
        headers=ADMIN_HEADERS,
        timeout=10,
    )
    if response.status_code != 201:
        logger.error("Could not seed contended product: %s", extract_error_detail(response))
        return

    CONTENDED.product_id = response.json()["product_id"]
    CONTENDED.initial_stock = CONTENDED_STOCK
    print(f"[LOADTEST] Contended product {CONTENDED.product_id} with {CONTENDED_STOCK} units")


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Verify the contended product was never oversold."""
    if CONTENDED.product_id is None:
        return

    response = requests.get(f"{environment.host}/products/{CONTENDED.product_id}", timeout=10)
    stock = response.json()["stock"]
    sold = CONTENDED.initial_stock - stock
    print(f"\n[LOADTEST] Contended stock left: {stock}, orders placed: {CONTENDED.orders_placed}")
    print(f"[LOADTEST] Rejected attempts: {CONTENDED.rejected}")

    if stock < 0 or CONTENDED.orders_placed > CONTENDED.initial_stock or sold != CONTENDED.orders_placed:
        logger.error("Oversell detected: sold %s, orders %s", sold, CONTENDED.orders_placed)
        environment.process_exit_code = 1
