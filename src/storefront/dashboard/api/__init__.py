"""Dashboard API package."""

from storefront.dashboard.api.routes import router

__all__ = ["router"]
