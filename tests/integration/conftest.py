"""Fixtures for HTTP integration tests.

Requests go through the real application, including its domain context
middleware, exception handlers and bearer-token dependency. Outgoing mail
is captured by the in-memory channel.
"""

import pytest
from fastapi.testclient import TestClient
from storefront.api.application import create_app
from storefront.auth.tokens import Principal, issue_token
from storefront.config import MailSettings, Settings
from storefront.notifications.channel import MemoryEmailAdapter
from storefront.notifications.sender import NotificationSender


@pytest.fixture
def settings():
    return Settings(jwt_secret="integration-secret", client_url="https://shop.example", cors_origins=["*"])


@pytest.fixture
def mailbox():
    return MemoryEmailAdapter()


@pytest.fixture
def client(settings, mailbox):
    app = create_app(settings, NotificationSender(MailSettings(), channel=mailbox))
    return TestClient(app)


@pytest.fixture
def auth_headers(settings):
    """Build an Authorization header for a customer (or admin)."""

    def _headers(customer_id="cust-001", role="customer", email="ada@example.com", name="Ada Lovelace"):
        token = issue_token(Principal(id=customer_id, email=email, name=name, role=role), settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def customer(auth_headers):
    return auth_headers()


@pytest.fixture
def admin(auth_headers):
    return auth_headers(customer_id="admin-1", role="admin", email="ops@example.com", name="Grace Hopper")
