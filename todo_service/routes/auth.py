"""
Auth routes: register and login.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging
import uuid

from ..auth import TokenIssuer, hash_password, verify_password
from ..db import get_db
from ..errors import AppError, DuplicateEmailError
from ..identity import get_token_issuer
from ..schemas import RegisterRequest, LoginRequest, MessageResponse, TokenResponse, ErrorResponse
from ..stores import CredentialStore
from ..utils.event_logger import log_auth_event
from ..validators import normalize_email, validate_email, validate_password

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


@router.post(
    "/register",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def register(
    payload: RegisterRequest,
    request: Request,
    store: CredentialStore = Depends(get_credential_store)
):
    email = validate_email(payload.email)
    password = validate_password(payload.password)

    user_id = uuid.uuid4()
    try:
        store.insert(user_id, email, hash_password(password))
    except DuplicateEmailError:
        log_auth_event("register_duplicate", request, email=email)
        raise

    log_auth_event("register_success", request, user_id=user_id, email=email)
    logger.info("Registered user %s", user_id)
    return MessageResponse(message="User registered")


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}}
)
def login(
    payload: LoginRequest,
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer)
):
    email = normalize_email(payload.email)
    user = store.find_by_email(email)
    if not user or not verify_password(payload.password, user.password_hash):
        log_auth_event("login_failure", request, user_id=user.id if user else None, email=email)
        # Same outcome for unknown email and wrong password
        raise AppError.unauthorized("Invalid credentials")

    log_auth_event("login_success", request, user_id=user.id, email=email)
    return TokenResponse(token=issuer.issue(user.id))
