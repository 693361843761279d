# app/utils/validation.py
from datetime import datetime, timezone
from typing import Optional, Union
from app.errors import ValidationError

ClientTimestamp = Union[int, float, str, None]

def require_fields(message: str = "Missing required fields", **fields: Optional[str]) -> None:
    """Raise ValidationError if any named field is missing or empty"""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(message)


def validate_subscription_email(email: Optional[str]) -> str:
    """Only checks for an "@"; deliverability is the mail provider's problem"""
    if not email or "@" not in email:
        raise ValidationError("Invalid email address")
    return email


def placeholder_name(email: str) -> str:
    return email.split("@")[0]


def parse_client_timestamp(value: ClientTimestamp) -> datetime:
    """Parse a browser timestamp (epoch millis or ISO-8601) as aware UTC"""
    if value is None or value == "":
        return datetime.now(timezone.utc)

    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

        if isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise ValidationError("Invalid timestamp") from e

    raise ValidationError("Invalid timestamp")
