"""Pydantic schemas for API requests and responses."""

from src.schemas.health import HealthResponse, StorageStats
from src.schemas.notification import NotificationAction, NotificationData, NotificationPayload
from src.schemas.subscription import (
    DeviceResponse,
    PushSubscription,
    SubscriptionKeys,
    VapidPublicKeyResponse,
)
from src.schemas.webhook import CallWebhook, CallWebhookResponse, is_valid_phone_number

__all__ = [
    "HealthResponse",
    "StorageStats",
    "NotificationAction",
    "NotificationData",
    "NotificationPayload",
    "PushSubscription",
    "SubscriptionKeys",
    "DeviceResponse",
    "VapidPublicKeyResponse",
    "CallWebhook",
    "CallWebhookResponse",
    "is_valid_phone_number",
]
