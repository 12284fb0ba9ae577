"""Email channel registry.

Returns the SMTP adapter when ``SMTP_HOST`` is set, the in-memory fake
otherwise. The adapter is a process-wide singleton.
"""

from storefront.identity.channel.email_port import EmailPort
from storefront.shared import settings

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        smtp = settings.smtp_settings()
        if smtp:
            from storefront.identity.channel.smtp_email import SMTPEmailAdapter

            _email_channel = SMTPEmailAdapter(**smtp)
        else:
            from storefront.identity.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
    return _email_channel


def reset_channel():
    """Drop the singleton (useful for testing)."""
    global _email_channel
    _email_channel = None
