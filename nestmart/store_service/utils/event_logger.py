"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from fastapi import Request
from typing import Optional
import logging

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "login_success",
    "login_failure",
    "user_registered",
    "access_denied",
}


def client_ip(request: Request) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For hop."""
    if request.client:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return None


def log_auth_event(
    event_type: str,
    request: Request,
    email: Optional[str] = None,
    user_id: Optional[int] = None,
    **fields,
) -> None:
    """
    Write one authentication event to the log.

    Args:
        event_type: One of: login_success, login_failure, user_registered,
                    access_denied
        request: FastAPI Request object
        email: Account email, if known
        user_id: Account id, if known
        **fields: Extra key=value context. Never pass credentials here.

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    extra = "".join(f" {k}={v}" for k, v in sorted(fields.items()))
    logger.info(
        "AUTH %s user_id=%s email=%s ip=%s timestamp=%s%s",
        event_type, user_id, email, client_ip(request),
        datetime.now(timezone.utc).isoformat(), extra,
    )
