"""Tests for e-mail templates, channels and the notification sender."""

import smtplib

import pytest
from storefront.config import MailSettings
from storefront.notifications.channel import MemoryEmailAdapter, OutgoingEmail, SmtpEmailAdapter, build_email_channel
from storefront.notifications.sender import NotificationSender
from storefront.notifications.templates import TEMPLATE_REGISTRY, NotificationTemplate, render
from storefront.order.order import Address, Order, OrderItem, PaymentInfo


def _order(**overrides):
    kwargs = {
        "customer_id": "cust-001",
        "customer_email": "ada@example.com",
        "customer_name": "Ada Lovelace",
        "items": [OrderItem(product_id="prod-1", name="Heritage Watch", price=100.0, quantity=2, total_price=200.0)],
        "shipping_address": Address(
            first_name="Ada",
            last_name="Lovelace",
            street="12 St James's Square",
            city="London",
            state="London",
            postal_code="SW1Y 4JH",
            country="GB",
        ),
        "shipping_method": "standard",
        "payment_info": PaymentInfo(method="card"),
    }
    kwargs.update(overrides)
    return Order.place(**kwargs)


# ---------------------------------------------------------------
# Templates
# ---------------------------------------------------------------
class TestTemplates:
    def test_every_template_is_registered(self):
        assert set(TEMPLATE_REGISTRY) == set(NotificationTemplate)

    def test_order_confirmation(self):
        content = render(
            NotificationTemplate.ORDER_CONFIRMATION,
            {"first_name": "Ada", "order_number": "ORD-20240101-ABCDEF", "total": "221.99", "currency": "USD"},
        )
        assert content["subject"] == "Order Confirmation - ORD-20240101-ABCDEF"
        assert "USD 221.99" in content["body"]
        assert "Hi Ada" in content["body"]
        assert "Estimated Delivery: TBD" in content["body"]

    def test_shipping_notification_defaults_carrier(self):
        content = render("shipping-notification", {"order_number": "ORD-1", "tracking_number": "1Z999"})
        assert content["subject"] == "Your Order Has Shipped - ORD-1"
        assert "Carrier: FedEx" in content["body"]
        assert "Tracking Number: 1Z999" in content["body"]

    def test_order_cancellation(self):
        content = render(NotificationTemplate.ORDER_CANCELLATION, {"order_number": "ORD-1"})
        assert content["subject"] == "Order Cancelled - ORD-1"
        assert "Hi there" in content["body"]

    def test_unknown_template(self):
        with pytest.raises(ValueError):
            render("welcome", {})


# ---------------------------------------------------------------
# Channels
# ---------------------------------------------------------------
class TestMemoryEmailAdapter:
    def setup_method(self):
        self.adapter = MemoryEmailAdapter()
        self.email = OutgoingEmail(to="ada@example.com", subject="Hi", body="Hello")

    def test_deliver_keeps_message_in_outbox(self):
        receipt = self.adapter.deliver(self.email)
        assert receipt.delivered is True
        assert receipt.message_id.startswith("mem-")
        assert self.adapter.outbox == [self.email]

    def test_refused_delivery(self):
        self.adapter.refuse("Mailbox full")
        receipt = self.adapter.deliver(self.email)
        assert receipt.delivered is False
        assert receipt.error == "Mailbox full"
        assert self.adapter.outbox == []

    def test_reset(self):
        self.adapter.deliver(self.email)
        self.adapter.refuse()
        self.adapter.reset()
        assert self.adapter.outbox == []
        assert self.adapter.refusal is None


class _RecordingSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.started_tls = False
        self.logged_in_as = None
        self.messages = []
        _RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in_as = user

    def send_message(self, message):
        self.messages.append(message)


class TestSmtpEmailAdapter:
    def test_delivers_through_relay(self, monkeypatch):
        _RecordingSMTP.instances.clear()
        monkeypatch.setattr(smtplib, "SMTP", _RecordingSMTP)
        adapter = SmtpEmailAdapter(MailSettings(backend="smtp", host="mail.local", port=2525, user="shop"))

        receipt = adapter.deliver(
            OutgoingEmail(to="ada@example.com", subject="Hi", body="Hello", html_body="<p>Hello</p>")
        )

        assert receipt.delivered is True
        assert receipt.message_id
        relay = _RecordingSMTP.instances[0]
        assert (relay.host, relay.port) == ("mail.local", 2525)
        assert relay.started_tls is True
        assert relay.logged_in_as == "shop"
        assert relay.messages[0]["To"] == "ada@example.com"

    def test_connection_failure_is_reported(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise ConnectionRefusedError("relay down")

        monkeypatch.setattr(smtplib, "SMTP", refuse)
        receipt = SmtpEmailAdapter(MailSettings(backend="smtp")).deliver(
            OutgoingEmail(to="a@b.com", subject="Hi", body="Hello")
        )
        assert receipt.delivered is False
        assert "relay down" in receipt.error


class TestBuildEmailChannel:
    def test_memory(self):
        assert isinstance(build_email_channel(MailSettings(backend="memory")), MemoryEmailAdapter)

    def test_smtp(self):
        assert isinstance(build_email_channel(MailSettings(backend="smtp")), SmtpEmailAdapter)


# ---------------------------------------------------------------
# Sender
# ---------------------------------------------------------------
class TestNotificationSender:
    def setup_method(self):
        self.channel = MemoryEmailAdapter()
        self.sender = NotificationSender(MailSettings(), channel=self.channel)

    def test_order_confirmation(self):
        order = _order()
        assert self.sender.order_confirmation(order) is True

        sent = self.channel.outbox[0]
        assert sent.to == "ada@example.com"
        assert sent.subject == f"Order Confirmation - {order.order_number}"
        assert "USD 221.99" in sent.body
        assert "Hi Ada" in sent.body

    def test_shipping_notification(self):
        order = _order()
        order.update_status("shipped", tracking_number="1Z999")
        assert self.sender.shipping_notification(order) is True
        assert "Tracking Number: 1Z999" in self.channel.outbox[0].body

    def test_order_cancellation(self):
        order = _order()
        order.cancel()
        assert self.sender.order_cancellation(order) is True
        assert self.channel.outbox[0].subject.startswith("Order Cancelled")

    def test_failure_is_swallowed(self):
        self.channel.refuse()
        assert self.sender.order_confirmation(_order()) is False

    def test_channel_exception_is_swallowed(self):
        class Exploding(MemoryEmailAdapter):
            def deliver(self, email):
                raise RuntimeError("boom")

        sender = NotificationSender(MailSettings(), channel=Exploding())
        assert sender.order_confirmation(_order()) is False

    def test_missing_recipient_is_skipped(self):
        assert self.sender.order_confirmation(_order(customer_email=None)) is False
        assert self.channel.outbox == []
