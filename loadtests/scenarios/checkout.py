"""Checkout load test scenarios.

ShopperUser walks the whole purchase journey against well-stocked products.
LastUnitRaceUser has every user try to buy the same low-stock product at
once; a 409 is the expected outcome for everyone past the available stock,
and the stock check at the end of the run verifies nothing was oversold.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import checkout_data, customer_id, product_data
from loadtests.helpers.response import extract_error_detail, is_retryable
from loadtests.helpers.state import ADMIN_HEADERS, CONTENDED, ShopperState


class ShopperJourney(SequentialTaskSet):
    """Browse -> Add two products -> Adjust quantity -> View cart -> Checkout -> View order."""

    def on_start(self):
        self.state = ShopperState(customer_id=customer_id())

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            products = resp.json() if resp.status_code == 200 else []
            in_stock = [p["id"] for p in products if p["stock"] > 5]
            if len(in_stock) < 2:
                # Seed the catalogue the first time round
                for _ in range(2):
                    created = self.client.post(
                        "/products", json=product_data(), headers=ADMIN_HEADERS, name="POST /products"
                    )
                    if created.status_code == 201:
                        in_stock.append(created.json()["product_id"])
            self.state.product_ids = random.sample(in_stock, 2) if len(in_stock) >= 2 else in_stock
            if not self.state.product_ids:
                resp.failure("No products available to buy")
                self.interrupt()

    @task
    def add_items(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": 1},
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.entry_ids.append(resp.json()["entry_id"])
                elif resp.status_code == 409:
                    resp.success()
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def adjust_quantity(self):
        if not self.state.entry_ids:
            return
        with self.client.put(
            f"/cart/items/{self.state.entry_ids[0]}",
            json={"quantity": 2},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/items/{id}",
        ) as resp:
            if resp.status_code in (200, 409):
                resp.success()
            else:
                resp.failure(f"Update cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.state.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            elif resp.status_code in (400, 409) or is_retryable(resp):
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_order(self):
        if self.state.order_ids:
            self.client.get(f"/orders/{self.state.order_ids[-1]}", headers=self.state.headers, name="GET /orders/{id}")
        self.interrupt()


class ShopperUser(HttpUser):
    """A customer buying a couple of products end to end."""

    tasks = [ShopperJourney]
    wait_time = between(1, 3)
    weight = 3


class LastUnitRaceUser(HttpUser):
    """Many customers checking out the same scarce product simultaneously."""

    wait_time = constant_pacing(1)
    weight = 1

    def on_start(self):
        self.state = ShopperState(customer_id=customer_id())

    @task
    def race_for_last_units(self):
        if CONTENDED.product_id is None:
            return

        added = self.client.post(
            "/cart/items",
            json={"product_id": CONTENDED.product_id, "quantity": 1},
            headers=self.state.headers,
            name="POST /cart/items [race]",
        )
        if added.status_code != 201:
            CONTENDED.rejected += 1
            return

        with self.client.post(
            "/orders",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders [race]",
        ) as resp:
            if resp.status_code == 201:
                CONTENDED.orders_placed += 1
            elif resp.status_code == 409 or is_retryable(resp):
                CONTENDED.rejected += 1
                resp.success()
                self.client.delete("/cart", headers=self.state.headers, name="DELETE /cart [race]")
            else:
                resp.failure(f"Race checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
