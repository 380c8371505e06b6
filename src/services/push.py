"""Web push fan-out to every device a user has registered."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import quote

from pywebpush import WebPushException, webpush

from src.schemas import (
    NotificationAction,
    NotificationData,
    NotificationPayload,
    PushSubscription,
)
from src.services.storage import SubscriptionStore
from src.services.vapid import VapidKeyManager

logger = logging.getLogger(__name__)

PUSH_TTL_SECONDS = 3600
PUSH_URGENCY = "high"

# Push service responses meaning the subscription will never work again
PERMANENT_FAILURE_STATUS_CODES = frozenset({400, 410})


class DeliveryStatus(StrEnum):
    """Outcome of a single delivery attempt."""

    SENT = "sent"
    GONE = "gone"
    FAILED = "failed"


@dataclass(frozen=True)
class DeliveryResult:
    """Tagged result of pushing to one subscription."""

    subscription: PushSubscription
    status: DeliveryStatus
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class SendResult:
    """Counts reported back for a fan-out."""

    sent: int
    total: int


class PushService:
    """Sends notification payloads to all of a user's subscriptions.

    Attempts run concurrently and each one resolves to a ``DeliveryResult``
    rather than raising, so one bad endpoint never affects the others.
    Subscriptions the push service reports as gone or malformed are pruned
    from the store; other failures are logged and left alone.
    """

    def __init__(
        self,
        store: SubscriptionStore,
        keys: VapidKeyManager,
        timeout: float = 5.0,
        sender: Callable[..., object] = webpush,
    ) -> None:
        self.store = store
        self.keys = keys
        self.timeout = timeout
        self._sender = sender

    async def send_to_user(self, user_id: str, payload: NotificationPayload) -> SendResult:
        """Push a payload to every subscription of a user."""
        subscriptions = self.store.get_subscriptions(user_id)

        if not subscriptions:
            logger.info(f"No subscriptions found for user {user_id}")
            return SendResult(sent=0, total=0)

        logger.info(f"Sending push to {len(subscriptions)} subscription(s) for user {user_id}")

        data = payload.to_wire()
        results = await asyncio.gather(
            *(self._deliver(subscription, data) for subscription in subscriptions)
        )

        sent = 0
        for index, result in enumerate(results, start=1):
            if result.status == DeliveryStatus.SENT:
                sent += 1
                continue

            logger.error(
                f"Failed to send to subscription {index} for user {user_id} "
                f"(status={result.status_code}): {result.error}"
            )
            if result.status == DeliveryStatus.GONE:
                logger.info(f"Removing invalid subscription {index} for user {user_id}")
                self.store.remove_subscription(user_id, result.subscription)

        logger.info(f"Successfully sent {sent}/{len(subscriptions)} notifications to user {user_id}")
        return SendResult(sent=sent, total=len(subscriptions))

    async def _deliver(self, subscription: PushSubscription, data: str) -> DeliveryResult:
        """Attempt delivery to one subscription in a worker thread."""
        try:
            await asyncio.to_thread(
                self._sender,
                subscription_info=subscription.to_subscription_info(),
                data=data,
                vapid_private_key=self.keys.signer,
                vapid_claims=self.keys.claims(),
                ttl=PUSH_TTL_SECONDS,
                headers={"Urgency": PUSH_URGENCY},
                timeout=self.timeout,
            )
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            status = (
                DeliveryStatus.GONE
                if status_code in PERMANENT_FAILURE_STATUS_CODES
                else DeliveryStatus.FAILED
            )
            return DeliveryResult(subscription, status, status_code=status_code, error=str(e))
        except Exception as e:
            # Timeouts and connection errors from the HTTP layer
            return DeliveryResult(subscription, DeliveryStatus.FAILED, error=str(e))

        return DeliveryResult(subscription, DeliveryStatus.SENT)


def create_call_payload(callee_number: str, base_url: str) -> NotificationPayload:
    """Build the notification that lets the salesperson tap to dial."""
    return NotificationPayload(
        title="📞 Incoming CRM Call",
        body=f"Tap to call {callee_number}",
        icon="/favicon.ico",
        badge="/favicon.ico",
        tag="crm-call",
        require_interaction=True,
        actions=[NotificationAction(action="call", title="Call Now")],
        data=NotificationData(
            url=f"{base_url}/call?to={quote(callee_number, safe='')}",
            callee_number=callee_number,
        ),
    )
