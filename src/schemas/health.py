"""Health check schemas."""

from src.schemas.base import CamelModel


class StorageStats(CamelModel):
    """Aggregate subscription counts."""

    users: int
    total_subscriptions: int
    avg_subscriptions_per_user: float


class HealthResponse(CamelModel):
    """Schema for the health check response."""

    ok: bool = True
    timestamp: str
    uptime: float
    storage: StorageStats
