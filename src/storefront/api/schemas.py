"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Cart Request Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "4f1c0b8e-prod", "quantity": 2}]}}

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class UpdateCartEntryRequest(BaseModel):
    """Zero or a negative quantity removes the entry."""

    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}

    quantity: int


# --- Checkout / Order Request Schemas ---


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "221B Baker Street, London NW1 6XE",
                    "payment_method": "card",
                    "idempotency_key": "checkout-2026-10-17-001",
                }
            ]
        }
    }

    shipping_address: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1, max_length=50)
    idempotency_key: str | None = Field(None, max_length=255)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}

    status: str = Field(..., max_length=20)


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Espresso Cup",
                    "description": "Double-walled glass, 80ml.",
                    "price": 12.5,
                    "image": "https://cdn.example.com/espresso-cup.jpg",
                    "stock": 40,
                    "category": "kitchen",
                }
            ]
        }
    }

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    image: str | None = Field(None, max_length=1000)
    stock: int = Field(0, ge=0)
    category: str | None = Field(None, max_length=100)


class UpdateProductRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    image: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, max_length=100)


class SetStockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"stock": 25}]}}

    stock: int = Field(..., ge=0)


# --- Response Schemas ---


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductIdResponse(BaseModel):
    product_id: str


class EntryIdResponse(BaseModel):
    entry_id: str


class ClearCartResponse(BaseModel):
    removed: int


class ProductResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    price: float
    image: str | None = None
    stock: int
    category: str | None = None


class CartLineResponse(BaseModel):
    """A cart entry with live catalogue data. ``product`` is null once deleted."""

    id: str
    product_id: str
    quantity: int
    product: ProductResponse | None = None


class CartResponse(BaseModel):
    user_id: str
    items: list[CartLineResponse]


class ProductSnapshot(BaseModel):
    title: str
    image: str | None = None
    category: str | None = None


class OrderItemResponse(BaseModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: float
    product: ProductSnapshot


class OrderResponse(BaseModel):
    id: str
    user_id: str
    total_price: float
    status: str
    created_at: datetime | None = None
    shipping_address: str
    payment_method: str
    items: list[OrderItemResponse]


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str
