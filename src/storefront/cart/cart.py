"""Cart aggregate — a customer's products and quantities ahead of checkout.

Each customer owns exactly one cart, and the cart's identity is the customer
id. Two requests that create a customer's cart at the same time therefore
address the same aggregate, and every cart change bumps the aggregate version.
Stock figures passed into the mutators are live reads taken by the caller;
they let the UI react early but are not authoritative. The authoritative
check happens at checkout.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import (
    CartCleared,
    CartEntryAdded,
    CartEntryQuantityChanged,
    CartEntryRemoved,
)
from storefront.domain import storefront
from storefront.errors import InsufficientStockError, NotFoundError


class ClearReason(Enum):
    REQUESTED = "Requested"
    CHECKOUT = "Checkout"


@storefront.entity(part_of="Cart")
class CartEntry:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    customer_id = Identifier(required=True)
    entries = HasMany(CartEntry)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_entry_per_product(self):
        product_ids = [str(entry.product_id) for entry in self.entries]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"entries": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, customer_id):
        now = datetime.now(UTC)
        return cls(
            id=str(customer_id),
            customer_id=str(customer_id),
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    @property
    def is_empty(self):
        return not self.entries

    def entry(self, entry_id):
        return next((e for e in self.entries if str(e.id) == str(entry_id)), None)

    def entry_for_product(self, product_id):
        return next((e for e in self.entries if str(e.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_product(self, product_id, quantity, available_stock):
        """Add ``quantity`` of a product, merging into an existing entry."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})

        existing = self.entry_for_product(product_id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if new_quantity > available_stock:
            raise InsufficientStockError(
                product_id=product_id,
                requested=new_quantity,
                available=available_stock,
            )

        now = datetime.now(UTC)
        if existing:
            existing.quantity = new_quantity
            entry = existing
        else:
            entry = CartEntry(product_id=str(product_id), quantity=quantity, added_at=now)
            self.add_entries(entry)

        self.updated_at = now

        self.raise_(
            CartEntryAdded(
                cart_id=str(self.id),
                entry_id=str(entry.id),
                product_id=str(product_id),
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )
        return entry

    def change_quantity(self, entry_id, quantity, available_stock):
        """Set an entry's quantity, within the stock ceiling."""
        entry = self.entry(entry_id)
        if entry is None:
            raise NotFoundError("Cart entry", entry_id)
        if quantity <= 0:
            self.discard_entry(entry_id)
            return
        if quantity > available_stock:
            raise InsufficientStockError(
                product_id=entry.product_id,
                requested=quantity,
                available=available_stock,
            )

        previous_quantity = entry.quantity
        entry.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartEntryQuantityChanged(
                cart_id=str(self.id),
                entry_id=str(entry_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def discard_entry(self, entry_id):
        """Remove an entry. Removing an entry that is not there does nothing."""
        entry = self.entry(entry_id)
        if entry is None:
            return False

        self.remove_entries(entry)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartEntryRemoved(
                cart_id=str(self.id),
                entry_id=str(entry_id),
                product_id=str(entry.product_id),
            )
        )
        return True

    def clear(self, reason=ClearReason.REQUESTED):
        """Remove every entry; returns how many were removed."""
        removed = list(self.entries)
        for entry in removed:
            self.remove_entries(entry)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                entry_count=len(removed),
                reason=reason.value,
            )
        )
        return len(removed)
