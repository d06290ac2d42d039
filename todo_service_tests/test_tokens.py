"""Tests for token issuance and verification."""
from datetime import datetime, timedelta, timezone
import uuid

import jwt
import pytest

from todo_service.auth import MissingSecretError, TokenError, TokenErrorKind, TokenIssuer

from .conftest import TEST_JWT_SECRET

OTHER_SECRET = "another-signing-secret-0123456789abcdef"


@pytest.fixture
def issuer():
    return TokenIssuer(TEST_JWT_SECRET)


def _verify_kind(issuer, token):
    with pytest.raises(TokenError) as excinfo:
        issuer.verify(token)
    return excinfo.value.kind


def test_issue_then_verify_recovers_subject(issuer):
    user_id = uuid.uuid4()
    assert issuer.verify(issuer.issue(user_id)) == user_id


def test_token_expires_after_24_hours(issuer):
    before = datetime.now(timezone.utc)
    token = issuer.issue(uuid.uuid4())
    claims = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"])
    expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    assert timedelta(hours=23, minutes=59) <= expires_at - before <= timedelta(hours=24, seconds=5)


def test_expired_token_with_valid_signature_is_expired(issuer):
    expired = TokenIssuer(TEST_JWT_SECRET, ttl=timedelta(minutes=-5)).issue(uuid.uuid4())
    assert _verify_kind(issuer, expired) is TokenErrorKind.EXPIRED


def test_token_signed_with_other_secret_is_bad_signature(issuer):
    forged = TokenIssuer(OTHER_SECRET).issue(uuid.uuid4())
    assert _verify_kind(issuer, forged) is TokenErrorKind.BAD_SIGNATURE


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "not.a.token.at.all"])
def test_malformed_token(issuer, token):
    assert _verify_kind(issuer, token) is TokenErrorKind.MALFORMED


def test_token_without_expiry_is_malformed(issuer):
    token = jwt.encode({"sub": str(uuid.uuid4())}, TEST_JWT_SECRET, algorithm="HS256")
    assert _verify_kind(issuer, token) is TokenErrorKind.MALFORMED


def test_non_uuid_subject_is_invalid_subject(issuer):
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "alice", "exp": exp}, TEST_JWT_SECRET, algorithm="HS256")
    assert _verify_kind(issuer, token) is TokenErrorKind.INVALID_SUBJECT


def test_missing_subject_is_invalid_subject(issuer):
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"exp": exp}, TEST_JWT_SECRET, algorithm="HS256")
    assert _verify_kind(issuer, token) is TokenErrorKind.INVALID_SUBJECT


@pytest.mark.parametrize("secret", [None, ""])
def test_issuer_refuses_missing_secret(secret):
    with pytest.raises(MissingSecretError):
        TokenIssuer(secret)
