"""In-memory e-mail adapter for tests and local development."""

from uuid import uuid4

from storefront.notifications.channel.email_port import DeliveryReceipt, EmailPort, OutgoingEmail


class MemoryEmailAdapter(EmailPort):
    """Keeps delivered messages in ``outbox``; can be told to refuse deliveries."""

    def __init__(self):
        self.outbox: list[OutgoingEmail] = []
        self.refusal: str | None = None

    def refuse(self, reason: str = "Mailbox unavailable"):
        self.refusal = reason

    def deliver(self, email: OutgoingEmail) -> DeliveryReceipt:
        if self.refusal:
            return DeliveryReceipt(delivered=False, error=self.refusal)
        self.outbox.append(email)
        return DeliveryReceipt(delivered=True, message_id=f"mem-{uuid4().hex[:12]}")

    def reset(self):
        self.outbox.clear()
        self.refusal = None
