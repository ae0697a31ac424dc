"""In-memory email adapter used in development and tests."""

from uuid import uuid4

import structlog

from foodcourt.notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)


class FakeEmailAdapter(EmailPort):
    """Records messages instead of delivering them; can be told to fail."""

    def __init__(self, sender: str = "orders@foodcourt.local"):
        self.sender = sender
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        if not to:
            return {"message_id": None, "status": "failed", "error": "Recipient address is empty"}
        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "from": self.sender,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        logger.debug("Email recorded", message_id=message_id, to=to, subject=subject)

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent emails and restore success mode."""
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
