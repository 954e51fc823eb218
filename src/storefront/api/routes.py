"""FastAPI endpoints for the storefront."""

from typing import Annotated

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.access import User, require_admin, require_user
from storefront.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    ClearCartResponse,
    CreateProductRequest,
    EntryIdResponse,
    OrderItemResponse,
    OrderResponse,
    OrderStatusResponse,
    ProductIdResponse,
    ProductResponse,
    ProductSnapshot,
    SetStockRequest,
    StatusResponse,
    UpdateCartEntryRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.cart.contents import cart_lines
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartEntry
from storefront.checkout.orchestrator import place_order
from storefront.order.history import all_orders, order_for, orders_for_customer
from storefront.order.status import UpdateOrderStatus
from storefront.product.management import (
    CreateProduct,
    DeleteProduct,
    SetStock,
    UpdateProduct,
    list_products,
    load_product,
)

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])
product_router = APIRouter(prefix="/products", tags=["products"])

CurrentUser = Annotated[User, Depends(require_user)]
Admin = Annotated[User, Depends(require_admin)]


# --- Serialisation ---


def product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        title=product.title,
        description=product.description,
        price=product.price,
        image=product.image,
        stock=product.stock or 0,
        category=product.category,
    )


def order_response(order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.customer_id),
        total_price=order.total_price,
        status=order.status,
        created_at=order.created_at,
        shipping_address=order.shipping_address,
        payment_method=order.payment_method,
        items=[
            OrderItemResponse(
                id=str(item.id),
                order_id=str(order.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                price=item.price,
                product=ProductSnapshot(
                    title=item.product_title,
                    image=item.product_image,
                    category=item.product_category,
                ),
            )
            for item in order.ordered_items
        ],
    )


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def view_cart(user: CurrentUser) -> CartResponse:
    return CartResponse(
        user_id=user.id,
        items=[
            CartLineResponse(
                id=line.entry_id,
                product_id=line.product_id,
                quantity=line.quantity,
                product=product_response(line.product) if line.product else None,
            )
            for line in cart_lines(user.id)
        ],
    )


@cart_router.post("/items", status_code=201, response_model=EntryIdResponse)
async def add_to_cart(body: AddToCartRequest, user: CurrentUser) -> EntryIdResponse:
    command = AddToCart(customer_id=user.id, product_id=body.product_id, quantity=body.quantity)
    result = current_domain.process(command, asynchronous=False)
    return EntryIdResponse(entry_id=result)


@cart_router.put("/items/{entry_id}", response_model=StatusResponse)
async def update_cart_entry(entry_id: str, body: UpdateCartEntryRequest, user: CurrentUser) -> StatusResponse:
    command = UpdateCartEntry(customer_id=user.id, entry_id=entry_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{entry_id}", response_model=StatusResponse)
async def remove_from_cart(entry_id: str, user: CurrentUser) -> StatusResponse:
    current_domain.process(RemoveFromCart(customer_id=user.id, entry_id=entry_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("", response_model=ClearCartResponse)
async def clear_cart(user: CurrentUser) -> ClearCartResponse:
    removed = current_domain.process(ClearCart(customer_id=user.id), asynchronous=False)
    return ClearCartResponse(removed=removed or 0)


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def checkout(body: CheckoutRequest, user: CurrentUser) -> OrderResponse:
    order = place_order(
        customer_id=user.id,
        shipping_address=body.shipping_address,
        payment_method=body.payment_method,
        idempotency_key=body.idempotency_key,
    )
    return order_response(order)


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(user: CurrentUser) -> list[OrderResponse]:
    return [order_response(order) for order in orders_for_customer(user.id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: CurrentUser) -> OrderResponse:
    return order_response(order_for(order_id, user))


# --- Admin endpoints ---


@admin_router.get("/orders", response_model=list[OrderResponse])
async def list_all_orders(admin: Admin) -> list[OrderResponse]:
    return [order_response(order) for order in all_orders()]


@admin_router.put("/orders/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, admin: Admin) -> OrderStatusResponse:
    status = current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def browse_products(category: str | None = None, search: str | None = None) -> list[ProductResponse]:
    return [product_response(product) for product in list_products(category=category, search=search)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return product_response(load_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, admin: Admin) -> ProductIdResponse:
    command = CreateProduct(
        title=body.title,
        description=body.description,
        price=body.price,
        image=body.image,
        stock=body.stock,
        category=body.category,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest, admin: Admin) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        title=body.title,
        description=body.description,
        price=body.price,
        image=body.image,
        category=body.category,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/stock", response_model=StatusResponse)
async def set_stock(product_id: str, body: SetStockRequest, admin: Admin) -> StatusResponse:
    current_domain.process(SetStock(product_id=product_id, stock=body.stock), asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, admin: Admin) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()
