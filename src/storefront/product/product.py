"""Product aggregate — catalogue record and the single source of truth for stock.

Stock is written by exactly two paths: the conditional decrement performed at
checkout and the explicit stock level set by an administrator. The aggregate
is versioned, so a decrement computed from a stale read is rejected when the
unit of work commits.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InsufficientStockError
from storefront.product.events import (
    ProductAdded,
    ProductDetailsUpdated,
    StockDecremented,
    StockLevelSet,
)
from storefront.shared.money import to_money


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    image = String(max_length=1000)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, title, price, stock=0, description=None, image=None, category=None):
        if price is None or price < 0:
            raise ValidationError({"price": ["Price must be zero or positive"]})
        if stock is None or stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        now = datetime.now(UTC)
        product = cls(
            title=title,
            description=description,
            price=float(to_money(price)),
            image=image,
            stock=stock,
            category=category,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                title=title,
                price=product.price,
                stock=stock,
                category=category,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Catalogue details
    # -------------------------------------------------------------------
    def update_details(self, title=None, description=None, price=None, image=None, category=None):
        """Change catalogue details. Fields left as None are not touched."""
        if price is not None:
            if price < 0:
                raise ValidationError({"price": ["Price must be zero or positive"]})
            self.price = float(to_money(price))
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image
        if category is not None:
            self.category = category

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                title=self.title,
                price=self.price,
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def has_stock_for(self, quantity):
        return (self.stock or 0) >= quantity

    def set_stock(self, stock):
        """Administrative stock correction."""
        if stock is None or stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous = self.stock or 0
        self.stock = stock
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockLevelSet(
                product_id=str(self.id),
                previous_stock=previous,
                new_stock=stock,
            )
        )

    def decrement_stock(self, quantity):
        """Subtract ``quantity`` only if at least that much is in stock."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        available = self.stock or 0
        if available < quantity:
            raise InsufficientStockError(
                product_id=self.id,
                requested=quantity,
                available=available,
                title=self.title,
            )

        now = datetime.now(UTC)
        self.stock = available - quantity
        self.updated_at = now

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=available,
                new_stock=self.stock,
                decremented_at=now,
            )
        )
