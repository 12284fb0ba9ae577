"""Domain events for the User and PasswordResetToken aggregates."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A user account was created, by self-registration or by an admin."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=100)
    role: String(required=True, max_length=10)
    created_by: String(max_length=254)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class PasswordChanged:
    """The user's credential was replaced (change or reset)."""

    __version__ = 1

    user_id: Identifier(required=True)
    changed_by: String(max_length=254)
    changed_at: DateTime(required=True)


@storefront.event(part_of="PasswordResetToken")
class PasswordResetRequested:
    """A reset code was issued. The code itself stays on the token."""

    __version__ = 1

    token_id: Identifier(required=True)
    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    name: String(max_length=100)
    expires_at: DateTime(required=True)
