"""Push subscription schemas."""

import json

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.base import CamelModel


class SubscriptionKeys(BaseModel):
    """Encryption keys generated by the browser for a subscription."""

    model_config = ConfigDict(extra="allow", frozen=True)

    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscription(BaseModel):
    """A browser push subscription, as produced by ``PushSubscription.toJSON()``.

    Unknown fields such as ``expirationTime`` are kept so that the stored
    record matches what the device sent.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    endpoint: str = Field(..., min_length=1)
    keys: SubscriptionKeys

    def content_key(self) -> str:
        """Canonical serialized form used for structural identity."""
        return json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))

    def to_subscription_info(self) -> dict:
        """Subscription info in the shape pywebpush expects."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.keys.p256dh, "auth": self.keys.auth},
        }


class DeviceResponse(CamelModel):
    """Device registration/removal acknowledgement."""

    success: bool = True
    message: str
    user_id: str


class VapidPublicKeyResponse(CamelModel):
    """Schema for VAPID public key response."""

    public_key: str
