"""SMTP e-mail adapter."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from storefront.config import MailSettings
from storefront.notifications.channel.email_port import DeliveryReceipt, EmailPort, OutgoingEmail


class SmtpEmailAdapter(EmailPort):
    def __init__(self, settings: MailSettings, timeout: float = 10.0):
        self.settings = settings
        self.timeout = timeout

    def _mime(self, email: OutgoingEmail) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message["Message-ID"] = make_msgid()
        message.set_content(email.body)
        if email.html_body:
            message.add_alternative(email.html_body, subtype="html")
        return message

    def deliver(self, email: OutgoingEmail) -> DeliveryReceipt:
        message = self._mime(email)
        try:
            with smtplib.SMTP(self.settings.host, self.settings.port, timeout=self.timeout) as smtp:
                if self.settings.use_tls:
                    smtp.starttls()
                if self.settings.user:
                    smtp.login(self.settings.user, self.settings.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return DeliveryReceipt(delivered=False, error=str(exc))
        return DeliveryReceipt(delivered=True, message_id=message["Message-ID"])
