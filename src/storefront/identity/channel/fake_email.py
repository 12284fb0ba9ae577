"""In-memory email adapter used in development and tests."""

from uuid import uuid4

from storefront.identity.channel.email_port import EmailPort


class FakeEmailAdapter(EmailPort):
    """Records messages instead of delivering them."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True

    def fail_next_sends(self, should_fail: bool = True):
        self.should_succeed = not should_fail

    def send(self, to: str, subject: str, body: str) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": "Email delivery failed"}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append({"message_id": message_id, "to": to, "subject": subject, "body": body})
        return {"message_id": message_id, "status": "sent"}

    def last_to(self, address: str) -> dict | None:
        matching = [m for m in self.sent_emails if m["to"] == address]
        return matching[-1] if matching else None
