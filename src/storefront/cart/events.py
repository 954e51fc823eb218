"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartEntryAdded:
    """A product was added to the cart, or its existing entry was topped up."""

    __version__ = 1

    cart_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartEntryQuantityChanged:
    __version__ = 1

    cart_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartEntryRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """All entries were removed, either on request or because the cart was checked out."""

    __version__ = 1

    cart_id = Identifier(required=True)
    entry_count = Integer(required=True)
    reason = String(required=True, max_length=50)
