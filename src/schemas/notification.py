"""Notification payload schemas."""

from typing import Any

from pydantic import Field

from src.schemas.base import CamelModel


class NotificationAction(CamelModel):
    """Button shown on the notification."""

    action: str
    title: str


class NotificationData(CamelModel):
    """Data the service worker reads when the notification is tapped."""

    url: str
    callee_number: str


class NotificationPayload(CamelModel):
    """Message body delivered to the service worker."""

    title: str
    body: str
    icon: str | None = None
    badge: str | None = None
    tag: str | None = None
    require_interaction: bool = False
    actions: list[NotificationAction] = Field(default_factory=list)
    data: NotificationData | dict[str, Any] | None = None

    def to_wire(self) -> str:
        """Serialize to the JSON string sent over web push."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
