"""Pytest configuration and fixtures."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from py_vapid import Vapid
from pywebpush import WebPushException

from src.config import Settings
from src.main import create_app
from src.schemas import PushSubscription
from src.services.push import PushService
from src.services.storage import SubscriptionStore
from src.services.vapid import VapidKeyManager, encode_keypair

WEBHOOK_TOKEN = "test-webhook-token"  # noqa: S105


def _make_subscription(name: str = "device", **extra) -> PushSubscription:
    return PushSubscription(
        endpoint=f"https://push.example.com/send/{name}",
        keys={"p256dh": f"p256dh-{name}", "auth": f"auth-{name}"},
        **extra,
    )


def _push_error(status_code: int | None) -> WebPushException:
    response = SimpleNamespace(status_code=status_code) if status_code is not None else None
    return WebPushException(f"Push failed: {status_code}", response=response)


@pytest.fixture
def make_subscription():
    """Factory for subscription records pointing at fake push endpoints."""
    return _make_subscription


@pytest.fixture
def push_error():
    """Factory for WebPushException as raised for a push service response."""
    return _push_error


@pytest.fixture(scope="session")
def vapid_keypair():
    """Generate one VAPID keypair for the whole test session."""
    vapid = Vapid()
    vapid.generate_keys()
    return encode_keypair(vapid)


@pytest.fixture
def settings(vapid_keypair):
    """Settings isolated from the environment and any .env file."""
    public_key, private_key = vapid_keypair
    return Settings(
        _env_file=None,
        webhook_token=WEBHOOK_TOKEN,
        admin_email="ops@example.com",
        vapid_public_key=public_key,
        vapid_private_key=private_key,
        environment="test",
    )


@pytest.fixture
def store():
    """Fresh subscription store."""
    return SubscriptionStore()


@pytest.fixture
def key_manager(settings):
    """Key manager loaded from the test settings."""
    manager = VapidKeyManager(settings.vapid_public_key, settings.vapid_private_key)
    manager.initialize(settings.admin_email)
    return manager


@pytest.fixture
def sender():
    """Stand-in for pywebpush.webpush that succeeds unless told otherwise."""
    return MagicMock(return_value=None)


@pytest.fixture
def push_service(store, key_manager, sender):
    """Push service wired to the fake sender."""
    return PushService(store=store, keys=key_manager, timeout=1.0, sender=sender)


@pytest.fixture
def app(settings, push_service):
    """Fresh application per test."""
    return create_app(settings, push_service=push_service)


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def webhook_headers():
    """Headers the CRM sends with a valid webhook."""
    return {"X-Webhook-Token": WEBHOOK_TOKEN}
