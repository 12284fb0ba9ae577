"""Product aggregate with its ProductImage entities."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.clock import utc_now

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.entity(part_of="Product")
class ProductImage:
    url: String(required=True, max_length=500)
    position: Integer(default=0, min_value=0)


@storefront.aggregate
class Product:
    """A sellable item. ``sold_quantity`` is a running counter kept by order placement."""

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    brand: String(max_length=100)
    category: String(max_length=100)
    views: Integer(default=0, min_value=0)
    sold_quantity: Integer(default=0, min_value=0)
    short_description: String(max_length=500)
    detailed_description: Text()
    images: HasMany(ProductImage)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def counters_cannot_be_negative(self):
        if (self.views or 0) < 0 or (self.sold_quantity or 0) < 0:
            raise ValidationError({"sold_quantity": ["Product counters cannot be negative"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        brand=None,
        category=None,
        short_description=None,
        detailed_description=None,
        views=0,
        sold_quantity=0,
        image_urls=None,
    ):
        from storefront.catalogue.events import ProductCreated

        now = utc_now()
        product = cls(
            name=name,
            price=price,
            brand=brand,
            category=category,
            short_description=short_description,
            detailed_description=detailed_description,
            views=views or 0,
            sold_quantity=sold_quantity or 0,
            created_at=now,
            updated_at=now,
        )
        for position, url in enumerate(image_urls or []):
            product.add_images(ProductImage(url=url, position=position))

        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=price,
                category=category,
                brand=brand,
                created_at=now,
            )
        )
        return product

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in sorted(self.images, key=lambda i: i.position or 0)]

    @property
    def primary_image(self) -> str | None:
        urls = self.image_urls
        return urls[0] if urls else None

    def update(
        self,
        name=_UNSET,
        price=_UNSET,
        brand=_UNSET,
        category=_UNSET,
        short_description=_UNSET,
        detailed_description=_UNSET,
        views=_UNSET,
        sold_quantity=_UNSET,
        image_urls=_UNSET,
    ):
        """Apply the supplied fields. ``image_urls`` replaces the whole image list."""
        from storefront.catalogue.events import ProductUpdated

        for attr, value in (
            ("name", name),
            ("price", price),
            ("brand", brand),
            ("category", category),
            ("short_description", short_description),
            ("detailed_description", detailed_description),
            ("views", views),
            ("sold_quantity", sold_quantity),
        ):
            if value is not _UNSET and value is not None:
                setattr(self, attr, value)

        if image_urls is not _UNSET and image_urls is not None:
            self.replace_images(image_urls)

        self.updated_at = utc_now()
        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                updated_at=self.updated_at,
            )
        )

    def replace_images(self, image_urls):
        for image in list(self.images):
            self.remove_images(image)
        for position, url in enumerate(image_urls):
            self.add_images(ProductImage(url=url, position=position))

    def record_sale(self, quantity):
        from storefront.catalogue.events import ProductSold

        if quantity < 1:
            raise ValidationError({"quantity": ["Sold quantity must be at least 1"]})
        self.sold_quantity = (self.sold_quantity or 0) + quantity
        self.raise_(
            ProductSold(
                product_id=self.id,
                quantity=quantity,
                sold_quantity=self.sold_quantity,
            )
        )
