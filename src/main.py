"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from src.api import call, devices, webhooks
from src.api.dependencies import get_subscription_store
from src.api.errors import register_exception_handlers
from src.config import DEFAULT_WEBHOOK_TOKEN, Settings, get_settings
from src.schemas import HealthResponse
from src.services.push import PushService
from src.services.rate_limit import SlidingWindowLimiter
from src.services.storage import SubscriptionStore
from src.services.vapid import VapidKeyManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    settings: Settings = app.state.settings
    if settings.webhook_token == DEFAULT_WEBHOOK_TOKEN:
        logger.warning("Using default webhook token. Set WEBHOOK_TOKEN in .env for production!")
    logger.info(f"CRM mobile push relay ready ({settings.environment})")
    yield
    logger.info("CRM mobile push relay shutting down")


def create_app(
    settings: Settings | None = None,
    push_service: PushService | None = None,
) -> FastAPI:
    """Build an app with its own key manager, store and push service."""
    settings = settings or get_settings()

    if push_service is None:
        key_manager = VapidKeyManager(settings.vapid_public_key, settings.vapid_private_key)
        key_manager.initialize(settings.admin_email)
        push_service = PushService(
            store=SubscriptionStore(),
            keys=key_manager,
            timeout=settings.push_timeout_seconds,
        )

    app = FastAPI(
        title="CRM Mobile Push",
        description="Relays CRM call events to mobile web push notifications",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    app.state.settings = settings
    app.state.key_manager = push_service.keys
    app.state.subscription_store = push_service.store
    app.state.push_service = push_service
    app.state.webhook_limiter = SlidingWindowLimiter(
        max_requests=settings.webhook_rate_limit,
        window=settings.webhook_rate_window_seconds,
    )
    app.state.started_at = time.monotonic()

    register_exception_handlers(app)

    # Register routers
    app.include_router(devices.router)
    app.include_router(webhooks.router)
    app.include_router(call.router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(
        request: Request,
        store: Annotated[SubscriptionStore, Depends(get_subscription_store)],
    ) -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            timestamp=datetime.now(UTC).isoformat(),
            uptime=time.monotonic() - request.app.state.started_at,
            storage=store.get_stats(),
        )

    return app


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once for the process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = get_settings()
configure_logging(settings)
app = create_app(settings)


def main() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
