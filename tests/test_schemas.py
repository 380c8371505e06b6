"""Tests for request validation schemas."""

import pytest
from pydantic import ValidationError

from src.schemas import CallWebhook, PushSubscription, is_valid_phone_number


@pytest.mark.parametrize(
    "number",
    ["+1234567890", "+49 123 456789", "(555) 123-4567", "+1-234-567-8900", "1234567", " +1234567890 "],
)
def test_valid_phone_numbers(number):
    assert is_valid_phone_number(number)


@pytest.mark.parametrize(
    "number",
    ["abc", "", "123456", "+123456", "123456789012345678901", "+1 555 CALL NOW", None, 1234567890],
)
def test_invalid_phone_numbers(number):
    assert not is_valid_phone_number(number)


def test_call_webhook_trims_fields():
    event = CallWebhook(owner_user_id=" rep-1 ", callee_number=" +1234567890 ")

    assert event.owner_user_id == "rep-1"
    assert event.callee_number == "+1234567890"


def test_call_webhook_rejects_bad_number():
    with pytest.raises(ValidationError, match="Invalid phone number format"):
        CallWebhook(owner_user_id="rep-1", callee_number="abc")


def test_subscription_keeps_extra_fields():
    sub = PushSubscription.model_validate(
        {
            "endpoint": "https://push.example.com/x",
            "expirationTime": None,
            "keys": {"p256dh": "p", "auth": "a"},
        }
    )

    assert sub.model_dump(mode="json")["expirationTime"] is None
    assert sub.to_subscription_info() == {
        "endpoint": "https://push.example.com/x",
        "keys": {"p256dh": "p", "auth": "a"},
    }


def test_subscription_content_key_is_canonical():
    first = PushSubscription.model_validate(
        {"endpoint": "https://push.example.com/x", "keys": {"p256dh": "p", "auth": "a"}}
    )
    second = PushSubscription.model_validate(
        {"keys": {"auth": "a", "p256dh": "p"}, "endpoint": "https://push.example.com/x"}
    )

    assert first.content_key() == second.content_key()
