"""CRM webhook schemas."""

import re

from pydantic import BaseModel, StrictStr, field_validator

from src.schemas.base import CamelModel

# Optional leading "+", then 7-20 digits, spaces, hyphens or parentheses
PHONE_NUMBER_PATTERN = re.compile(r"^\+?[0-9\s\-()]{7,20}$")


def is_valid_phone_number(phone_number: object) -> bool:
    """Check a phone number against the permissive international format."""
    if not isinstance(phone_number, str) or not phone_number:
        return False
    return PHONE_NUMBER_PATTERN.match(phone_number.strip()) is not None


class CallWebhook(BaseModel):
    """Call event posted by the CRM."""

    owner_user_id: StrictStr
    callee_number: StrictStr

    @field_validator("owner_user_id")
    @classmethod
    def validate_owner_user_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Missing or invalid owner_user_id")
        return value

    @field_validator("callee_number")
    @classmethod
    def validate_callee_number(cls, value: str) -> str:
        if not is_valid_phone_number(value):
            raise ValueError("Invalid phone number format")
        return value.strip()


class CallWebhookResponse(CamelModel):
    """Result of relaying a call event."""

    success: bool = True
    message: str
    user_id: str
    phone_number: str
    sent: int
    total: int
