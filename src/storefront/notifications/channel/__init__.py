"""E-mail channel adapters.

``build_email_channel`` picks the adapter named by ``MailSettings.backend``:
``memory`` keeps messages in process, ``smtp`` delivers through a relay.
"""

from storefront.config import MailSettings
from storefront.notifications.channel.email_port import DeliveryReceipt, EmailPort, OutgoingEmail
from storefront.notifications.channel.memory_email import MemoryEmailAdapter
from storefront.notifications.channel.smtp_email import SmtpEmailAdapter

__all__ = [
    "DeliveryReceipt",
    "EmailPort",
    "MemoryEmailAdapter",
    "OutgoingEmail",
    "SmtpEmailAdapter",
    "build_email_channel",
]


def build_email_channel(settings: MailSettings) -> EmailPort:
    if settings.backend == "smtp":
        return SmtpEmailAdapter(settings)
    if settings.backend == "memory":
        return MemoryEmailAdapter()
    raise ValueError(f"Unknown mail backend: {settings.backend}")
