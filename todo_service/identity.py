"""
Request identity: bearer token extraction and verification.

The identity middleware guards every path under a protected prefix. It
runs before routing, so an unauthenticated request is rejected before its
body is read or any handler runs. On success the caller's user_id is
stored on ``request.state`` for the lifetime of the request, and
``require_identity`` hands it to the handler. Neither touches the
database.
"""
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional
import logging
import uuid

from .auth import TokenError, TokenIssuer
from .errors import AppError
from .utils.event_logger import log_auth_event

logger = logging.getLogger(__name__)

# Only documents the scheme in OpenAPI; parsing is done by extract_bearer_token
_bearer_scheme = HTTPBearer(auto_error=False, bearerFormat="JWT", scheme_name="bearer_auth")


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token from ``Bearer <token>``, or None when the header is
    missing or not exactly of that form. The scheme is case-insensitive.
    """
    if not authorization:
        return None
    scheme, sep, token = authorization.partition(" ")
    if not sep or scheme.lower() != "bearer":
        return None
    if not token or any(ch.isspace() for ch in token):
        return None
    return token


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def authenticate(request: Request) -> uuid.UUID:
    """
    Resolve the caller from the Authorization header and attach it to
    ``request.state``.

    Raises:
        AppError: UNAUTHORIZED, with the same message for every failure
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        logger.debug("Missing or malformed Authorization header on %s", request.url.path)
        raise AppError.unauthorized()

    try:
        user_id = get_token_issuer(request).verify(token)
    except TokenError as exc:
        # The kind is only logged; every failure looks the same to the client
        log_auth_event("token_rejected", request, metadata={"reason": exc.kind.value})
        raise AppError.unauthorized() from exc

    request.state.user_id = user_id
    return user_id


def register_identity_middleware(app: FastAPI, prefix: str) -> None:
    """Require a valid bearer token for ``prefix`` and everything below it."""

    @app.middleware("http")
    async def identity_middleware(request: Request, call_next):
        path = request.url.path
        if path == prefix or path.startswith(prefix + "/"):
            try:
                authenticate(request)
            except AppError as exc:
                return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
        return await call_next(request)


def require_identity(
    request: Request,
    _credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> uuid.UUID:
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        user_id = authenticate(request)
    return user_id
