"""Device registration endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import (
    get_key_manager,
    get_subscription_store,
    limit_body_size,
    require_user_id,
)
from src.schemas import DeviceResponse, PushSubscription, VapidPublicKeyResponse
from src.services.storage import SubscriptionStore
from src.services.vapid import VapidKeyManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["devices"])


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
async def get_vapid_public_key(
    keys: Annotated[VapidKeyManager, Depends(get_key_manager)],
) -> VapidPublicKeyResponse:
    """Get the VAPID public key for push notification subscription."""
    return VapidPublicKeyResponse(public_key=keys.get_public_key())


@router.post(
    "/devices",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_body_size)],
)
async def register_device(
    subscription: PushSubscription,
    user_id: Annotated[str, Depends(require_user_id)],
    store: Annotated[SubscriptionStore, Depends(get_subscription_store)],
) -> DeviceResponse:
    """Register a device's push subscription for a user."""
    try:
        store.add_subscription(user_id, subscription)
    except Exception as e:
        logger.error(f"Error registering device for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register device",
        ) from e

    return DeviceResponse(message="Device registered successfully", user_id=user_id)


@router.delete(
    "/devices",
    response_model=DeviceResponse,
    dependencies=[Depends(limit_body_size)],
)
async def unregister_device(
    subscription: PushSubscription,
    user_id: Annotated[str, Depends(require_user_id)],
    store: Annotated[SubscriptionStore, Depends(get_subscription_store)],
) -> DeviceResponse:
    """Remove a device's push subscription."""
    if store.remove_subscription(user_id, subscription):
        return DeviceResponse(message="Device unregistered successfully", user_id=user_id)
    return DeviceResponse(message="Subscription not found", user_id=user_id)
