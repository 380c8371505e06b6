"""FastAPI dependencies for services, headers and webhook protection."""

import secrets
from typing import Annotated

from http import HTTPStatus

from fastapi import Depends, Header, HTTPException, Request, Response, status

from src.config import Settings
from src.services.push import PushService
from src.services.rate_limit import SlidingWindowLimiter
from src.services.storage import SubscriptionStore
from src.services.vapid import VapidKeyManager


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running app was built with."""
    return request.app.state.settings


def get_subscription_store(request: Request) -> SubscriptionStore:
    """Get the app's subscription store."""
    return request.app.state.subscription_store


def get_key_manager(request: Request) -> VapidKeyManager:
    """Get the app's VAPID key manager."""
    return request.app.state.key_manager


def get_push_service(request: Request) -> PushService:
    """Get the app's push service."""
    return request.app.state.push_service


def get_client_ip(request: Request) -> str:
    """Client address, preferring the first hop of X-Forwarded-For."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_base_url(request: Request) -> str:
    """Origin of the current request as seen by the client."""
    scheme = request.headers.get("x-forwarded-proto") or request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}"


def require_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    """Get the user ID a device is registering for."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required header: X-User-Id",
        )
    return x_user_id.strip()


def verify_webhook_token(
    settings: Annotated[Settings, Depends(get_app_settings)],
    x_webhook_token: Annotated[str | None, Header()] = None,
) -> None:
    """Check the shared secret the CRM sends with each webhook."""
    if not x_webhook_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing webhook token",
        )

    if not secrets.compare_digest(x_webhook_token.encode(), settings.webhook_token.encode()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid webhook token",
        )


def webhook_rate_limit(
    request: Request,
    response: Response,
    client_ip: Annotated[str, Depends(get_client_ip)],
) -> None:
    """Enforce the per-client webhook rate limit and report it in headers."""
    limiter: SlidingWindowLimiter = request.app.state.webhook_limiter
    state = limiter.check(client_ip)
    if not state.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Please try again later.",
            headers={**state.headers(), "Retry-After": str(state.retry_after)},
        )
    response.headers.update(state.headers())


async def limit_body_size(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> None:
    """Reject request bodies larger than the configured maximum."""
    too_large = HTTPException(
        status_code=int(HTTPStatus.REQUEST_ENTITY_TOO_LARGE),
        detail=f"Request body exceeds {settings.max_body_bytes} bytes",
    )

    content_length = request.headers.get("content-length")
    if (
        content_length
        and content_length.isdigit()
        and int(content_length) > settings.max_body_bytes
    ):
        raise too_large

    # Chunked bodies carry no Content-Length
    if len(await request.body()) > settings.max_body_bytes:
        raise too_large
