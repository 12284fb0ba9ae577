"""Identity API package."""

from storefront.identity.api.routes import admin_user_router, auth_router, user_router

__all__ = ["auth_router", "user_router", "admin_user_router"]
