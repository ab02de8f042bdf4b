"""Port for e-mail delivery."""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class OutgoingEmail(BaseModel):
    to: str
    subject: str
    body: str
    html_body: str | None = None


class DeliveryReceipt(BaseModel):
    delivered: bool
    message_id: str | None = None
    error: str | None = None


class EmailPort(ABC):
    @abstractmethod
    def deliver(self, email: OutgoingEmail) -> DeliveryReceipt:
        """Hand one message to the transport.

        Transport failures come back as an undelivered receipt rather than
        an exception.
        """
