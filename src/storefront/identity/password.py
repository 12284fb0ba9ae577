"""Password change and email-based password reset.

A reset is a two-step flow. ``RequestPasswordReset`` issues a five-digit code
(replacing any earlier code for the user) and the code is mailed out by the
``PasswordResetRequested`` event handler. ``redeem_reset_code`` then checks
the code and, when it is valid, replaces the password.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.queries import find_user_by_email
from storefront.identity.user import PasswordResetToken, User, normalize_email
from storefront.shared import settings
from storefront.shared.paging import fetch_all

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class ChangePassword:
    """Replace a user's password. The caller has already verified the old one."""

    user_id: Identifier(required=True)
    password_hash: String(required=True, max_length=255)
    actor: String(max_length=254)


@storefront.command(part_of="PasswordResetToken")
class RequestPasswordReset:
    email: String(required=True, max_length=254)


@storefront.command(part_of="PasswordResetToken")
class ResetPassword:
    email: String(required=True, max_length=254)
    code: String(required=True, max_length=10)
    password_hash: String(required=True, max_length=255)


@storefront.command(part_of="PasswordResetToken")
class DiscardResetToken:
    token_id: Identifier(required=True)


def find_reset_token(email: str, code: str) -> PasswordResetToken | None:
    repo = current_domain.repository_for(PasswordResetToken)
    return repo._dao.query.filter(email=normalize_email(email), token=code.strip()).all().first


def delete_reset_tokens(user_id: str) -> int:
    """Delete every reset token issued to ``user_id``. Returns how many were removed."""
    repo = current_domain.repository_for(PasswordResetToken)
    tokens = fetch_all(repo._dao.query.filter(user_id=str(user_id)))
    for token in tokens:
        repo._dao.delete(token)
    return len(tokens)


def _invalid_code():
    return ValidationError({"code": ["Invalid or expired reset code"]})


@storefront.command_handler(part_of=User)
class ChangePasswordHandler:
    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_password(command.password_hash, actor=command.actor)
        repo.add(user)
        logger.info("user.password_changed", user_id=str(user.id))


@storefront.command_handler(part_of=PasswordResetToken)
class PasswordResetHandler:
    @handle(RequestPasswordReset)
    def request_reset(self, command):
        user = find_user_by_email(command.email)
        if user is None:
            raise ValidationError({"email": [f"No account registered with {command.email}"]})

        delete_reset_tokens(user.id)
        token = PasswordResetToken.issue(user, ttl_minutes=settings.password_reset_ttl_minutes())
        current_domain.repository_for(PasswordResetToken).add(token)
        logger.info("password_reset.requested", user_id=str(user.id), expires_at=token.expires_at.isoformat())
        return str(token.id)

    @handle(ResetPassword)
    def reset_password(self, command):
        token = find_reset_token(command.email, command.code)
        if token is None or token.is_expired():
            raise _invalid_code()

        user_repo = current_domain.repository_for(User)
        user = user_repo.get(token.user_id)
        user.change_password(command.password_hash, actor=user.email)
        user_repo.add(user)

        delete_reset_tokens(user.id)
        logger.info("password_reset.completed", user_id=str(user.id))

    @handle(DiscardResetToken)
    def discard_token(self, command):
        repo = current_domain.repository_for(PasswordResetToken)
        try:
            repo._dao.delete(repo.get(command.token_id))
        except ObjectNotFoundError:
            pass  # Already consumed


def redeem_reset_code(email: str, code: str, password_hash: str) -> None:
    """Check a reset code and set the new password.

    An expired code is discarded in its own unit of work before the
    validation error is raised, so the deletion is not rolled back with the
    failed reset.
    """
    token = find_reset_token(email, code)
    if token is None:
        raise _invalid_code()
    if token.is_expired():
        current_domain.process(DiscardResetToken(token_id=token.id), asynchronous=False)
        logger.info("password_reset.expired", user_id=str(token.user_id))
        raise _invalid_code()

    current_domain.process(
        ResetPassword(email=email, code=code, password_hash=password_hash),
        asynchronous=False,
    )
