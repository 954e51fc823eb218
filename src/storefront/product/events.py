"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    category = String()


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Catalogue details (title, price, image, ...) of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)


@storefront.event(part_of="Product")
class StockLevelSet:
    """An administrator set the stock level explicitly."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Stock was committed to an order at checkout."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    decremented_at = DateTime(required=True)
