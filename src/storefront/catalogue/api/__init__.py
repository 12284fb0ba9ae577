"""Catalogue API package."""

from storefront.catalogue.api.routes import product_router, upload_router

__all__ = ["product_router", "upload_router"]
