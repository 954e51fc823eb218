"""Product administration — commands, handler and catalogue reads."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.domain import logger, storefront
from storefront.errors import NotFoundError
from storefront.product.product import Product


@storefront.command(part_of="Product")
class CreateProduct:
    title = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    image = String(max_length=1000)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    title = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    image = String(max_length=1000)
    category = String(max_length=100)


@storefront.command(part_of="Product")
class SetStock:
    """Set a product's stock level explicitly (admin correction or restock)."""

    product_id = Identifier(required=True)
    stock = Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def load_product(product_id):
    """Fetch a product or raise ``NotFoundError``."""
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFoundError("Product", product_id) from None


def list_products(category=None, search=None):
    """Catalogue listing, optionally narrowed to one category.

    ``search`` keeps products whose title, description or category contains
    the term, ignoring case. Results stay in title order.
    """
    query = current_domain.repository_for(Product)._dao.query
    if category:
        query = query.filter(category=category)
    term = (search or "").strip()
    if term:
        query = query.filter(
            Q(title__icontains=term) | Q(description__icontains=term) | Q(category__icontains=term)
        )
    return query.order_by("title").all().items


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.add(
            title=command.title,
            description=command.description,
            price=command.price,
            image=command.image,
            stock=command.stock or 0,
            category=command.category,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_product(command.product_id)
        product.update_details(
            title=command.title,
            description=command.description,
            price=command.price,
            image=command.image,
            category=command.category,
        )
        current_domain.repository_for(Product).add(product)

    @handle(SetStock)
    def set_stock(self, command):
        product = load_product(command.product_id)
        product.set_stock(command.stock)
        current_domain.repository_for(Product).add(product)
        logger.info("Stock level set", product_id=str(product.id), stock=command.stock)

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = load_product(command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id))
