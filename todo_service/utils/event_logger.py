"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from fastapi import Request
from typing import Optional
import logging
import os
import uuid

from ..config import settings

logger = logging.getLogger("todo_service.auth_events")


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_duplicate",
    "login_success",
    "login_failure",
    "token_rejected",
}


def configure_event_log_file(log_dir: Optional[str] = None) -> None:
    """
    Also write auth events to ``<log_dir>/auth_events.log`` when a log
    directory is configured. Stdout logging is configured by the app.
    """
    log_dir = log_dir or settings.LOG_DIR
    if not log_dir:
        return

    try:
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(log_dir, "auth_events.log"))
    except OSError as e:
        # Continue with stdout only
        logger.warning("Could not set up file logging in %s: %s", log_dir, e)
        return

    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s:%(message)s"))
    logger.addHandler(handler)


def client_ip(request: Request) -> Optional[str]:
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # X-Forwarded-For can contain multiple IPs, take the first one
    forwarded = request.headers.get("x-forwarded-for")
    if not ip_address and forwarded:
        ip_address = forwarded.split(",")[0].strip()

    return ip_address


def log_auth_event(
    event_type: str,
    request: Request,
    user_id: Optional[uuid.UUID] = None,
    email: Optional[str] = None,
    metadata: Optional[dict] = None
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: register_success, register_duplicate,
                    login_success, login_failure, token_rejected
        request: FastAPI Request object
        user_id: Authenticated or registered user, when known
        email: Email submitted with the request, when any
        metadata: Optional dictionary of additional context

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    logger.info(
        "AUTH %s user_id=%s email=%s ip=%s user_agent=%s metadata=%s timestamp=%s",
        event_type,
        user_id,
        email,
        client_ip(request),
        request.headers.get("user-agent"),
        metadata or {},
        datetime.now(timezone.utc).isoformat()
    )
