"""Credential checks for login and password change."""

import structlog
from protean.exceptions import ValidationError

from storefront.identity.credentials import verify_password
from storefront.identity.queries import find_user_by_email
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


def authenticate(email: str, password: str) -> User | None:
    """Return the user for a matching email/password pair, otherwise None."""
    user = find_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("auth.login_failed", email=email)
        return None
    return user


def verify_current_password(user: User, password: str) -> None:
    if not verify_password(password, user.password_hash):
        raise ValidationError({"current_password": ["Current password is incorrect"]})
