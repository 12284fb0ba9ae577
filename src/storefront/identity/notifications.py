"""Delivers password reset codes by email."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.identity.channel import get_email_channel
from storefront.identity.events import PasswordResetRequested
from storefront.identity.user import PasswordResetToken
from storefront.shared import settings

logger = structlog.get_logger(__name__)

RESET_SUBJECT = "Your password reset code"


def render_reset_email(name: str | None, code: str, ttl_minutes: int) -> str:
    greeting = f"Hello {name}," if name else "Hello,"
    return (
        f"{greeting}\n\n"
        f"Your password reset code is: {code}\n"
        f"The code expires in {ttl_minutes} minutes.\n\n"
        "If you did not ask to reset your password you can ignore this message.\n"
    )


@storefront.event_handler(part_of=PasswordResetToken)
class PasswordResetMailer:
    @handle(PasswordResetRequested)
    def on_password_reset_requested(self, event: PasswordResetRequested) -> None:
        try:
            token = current_domain.repository_for(PasswordResetToken).get(event.token_id)
        except ObjectNotFoundError:
            # Replaced by a newer request or already redeemed
            logger.info("password_reset.token_gone", user_id=str(event.user_id), token_id=str(event.token_id))
            return

        body = render_reset_email(event.name, token.token, settings.password_reset_ttl_minutes())
        result = get_email_channel().send(to=event.email, subject=RESET_SUBJECT, body=body)
        if result["status"] != "sent":
            logger.error(
                "password_reset.email_failed",
                user_id=str(event.user_id),
                error=result.get("error"),
            )
            return
        logger.info("password_reset.email_sent", user_id=str(event.user_id), message_id=result["message_id"])
