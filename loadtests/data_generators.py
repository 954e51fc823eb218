"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names and limits of the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["kitchen", "decor", "stationery", "garden", "toys"]


def customer_id() -> str:
    return f"loadtest-{uuid.uuid4().hex[:12]}"


def product_data(stock: int | None = None) -> dict:
    """A catalogue product with a two-decimal price."""
    return {
        "title": fake.catch_phrase()[:255],
        "description": fake.paragraph(nb_sentences=2),
        "price": round(random.uniform(1, 200), 2),
        "image": fake.image_url(),
        "stock": stock if stock is not None else random.randint(50, 500),
        "category": random.choice(CATEGORIES),
    }


def checkout_data(with_idempotency_key: bool = True) -> dict:
    payload = {
        "shipping_address": fake.address().replace("\n", ", "),
        "payment_method": random.choice(["card", "paypal", "bank_transfer"]),
    }
    if with_idempotency_key:
        payload["idempotency_key"] = uuid.uuid4().hex
    return payload
