"""Product management by ADMIN principals: create, update, delete."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.cart import discard_lines_for_product

logger = structlog.get_logger(__name__)


def _image_urls(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else list(raw)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    brand: String(max_length=100)
    category: String(max_length=100)
    short_description: String(max_length=500)
    detailed_description: Text()
    views: Integer(default=0, min_value=0)
    sold_quantity: Integer(default=0, min_value=0)
    image_urls: Text()  # JSON: list of image URLs, first is the primary image


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    price: Float(min_value=0.0)
    brand: String(max_length=100)
    category: String(max_length=100)
    short_description: String(max_length=500)
    detailed_description: Text()
    views: Integer(min_value=0)
    sold_quantity: Integer(min_value=0)
    image_urls: Text()  # JSON: replaces the image list when present


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            brand=command.brand,
            category=command.category,
            short_description=command.short_description,
            detailed_description=command.detailed_description,
            views=command.views,
            sold_quantity=command.sold_quantity,
            image_urls=_image_urls(command.image_urls),
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            name=command.name,
            price=command.price,
            brand=command.brand,
            category=command.category,
            short_description=command.short_description,
            detailed_description=command.detailed_description,
            views=command.views,
            sold_quantity=command.sold_quantity,
            image_urls=_image_urls(command.image_urls),
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        # Orders keep their own snapshot of name, image and price
        removed_lines = discard_lines_for_product(product.id)
        if product.images:
            product.replace_images([])
            repo.add(product)
        repo._dao.delete(product)
        logger.info("product.deleted", product_id=str(product.id), cart_lines_removed=removed_lines)
