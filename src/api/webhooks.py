"""Webhook endpoint for CRM call events."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import (
    get_base_url,
    get_push_service,
    limit_body_size,
    verify_webhook_token,
    webhook_rate_limit,
)
from src.schemas import CallWebhook, CallWebhookResponse
from src.services.push import PushService, create_call_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post(
    "/call",
    response_model=CallWebhookResponse,
    dependencies=[
        Depends(webhook_rate_limit),
        Depends(limit_body_size),
        Depends(verify_webhook_token),
    ],
)
async def handle_call_webhook(
    event: CallWebhook,
    base_url: Annotated[str, Depends(get_base_url)],
    push_service: Annotated[PushService, Depends(get_push_service)],
) -> CallWebhookResponse:
    """Notify the call owner's devices so they can tap to dial.

    Partial delivery is not an error; the counts are reported back.
    """
    payload = create_call_payload(event.callee_number, base_url)

    try:
        result = await push_service.send_to_user(event.owner_user_id, payload)
    except Exception as e:
        logger.error(f"Error processing webhook: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process webhook",
        ) from e

    logger.info(f"Webhook processed: {event.callee_number} for user {event.owner_user_id}")

    return CallWebhookResponse(
        message="Push notification sent",
        user_id=event.owner_user_id,
        phone_number=event.callee_number,
        sent=result.sent,
        total=result.total,
    )
