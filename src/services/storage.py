"""In-memory storage for push subscriptions."""

import logging
import threading

from src.schemas import PushSubscription, StorageStats

logger = logging.getLogger(__name__)


class SubscriptionStore:
    """Maps user IDs to their device subscriptions.

    Each user's subscriptions are keyed by their canonical serialized form,
    so registering the same record twice stores it once. Users are dropped
    as soon as their last subscription is removed. Nothing is persisted.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, dict[str, PushSubscription]] = {}
        self._lock = threading.RLock()

    def add_subscription(self, user_id: str, subscription: PushSubscription) -> None:
        """Add a subscription for a user. Duplicate records are ignored."""
        key = subscription.content_key()
        with self._lock:
            user_subscriptions = self._subscriptions.setdefault(user_id, {})
            user_subscriptions.setdefault(key, subscription)
            total = len(user_subscriptions)
        logger.info(f"Added subscription for user {user_id}. Total: {total}")

    def get_subscriptions(self, user_id: str) -> list[PushSubscription]:
        """Snapshot of a user's subscriptions, empty for unknown users."""
        with self._lock:
            return list(self._subscriptions.get(user_id, {}).values())

    def remove_subscription(self, user_id: str, subscription: PushSubscription) -> bool:
        """Remove a subscription if present.

        Returns True if a record was removed.
        """
        key = subscription.content_key()
        with self._lock:
            user_subscriptions = self._subscriptions.get(user_id)
            if not user_subscriptions or user_subscriptions.pop(key, None) is None:
                return False
            if not user_subscriptions:
                del self._subscriptions[user_id]
        logger.info(f"Removed subscription for user {user_id}")
        return True

    def get_user_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def get_total_subscriptions(self) -> int:
        with self._lock:
            return sum(len(subs) for subs in self._subscriptions.values())

    def get_stats(self) -> StorageStats:
        """Get storage statistics."""
        with self._lock:
            users = self.get_user_count()
            total = self.get_total_subscriptions()
        average = round(total / users, 2) if users else 0
        return StorageStats(
            users=users,
            total_subscriptions=total,
            avg_subscriptions_per_user=average,
        )
