from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
import uuid
import jwt

DEFAULT_TOKEN_TTL = timedelta(hours=24)

# Argon2id, salted per call; the PHC string carries params + salt + digest
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__rounds=3,
    argon2__memory_cost=65536,
    argon2__parallelism=4,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # unrecognised or malformed hash string
        return False


class MissingSecretError(RuntimeError):
    """The token signing secret is absent."""


class TokenErrorKind(str, Enum):
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    INVALID_SUBJECT = "invalid_subject"


class TokenError(Exception):
    def __init__(self, kind: TokenErrorKind, detail: str = ""):
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind


class TokenIssuer:
    """
    Signs and verifies bearer identity tokens.

    One instance is built at startup from the configured secret and shared
    read-only by every request.
    """

    def __init__(self, secret: Optional[str], ttl: timedelta = DEFAULT_TOKEN_TTL, algorithm: str = "HS256"):
        if not secret:
            raise MissingSecretError("JWT signing secret is not configured")
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    def issue(self, user_id: uuid.UUID) -> str:
        now = datetime.now(timezone.utc)
        payload = {"sub": str(user_id), "iat": now, "exp": now + self.ttl}
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """
        Verify signature, then expiry, then subject.

        Returns:
            The user_id carried in ``sub``

        Raises:
            TokenError: with the kind of failure
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenError(TokenErrorKind.EXPIRED) from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenError(TokenErrorKind.BAD_SIGNATURE) from exc
        except jwt.exceptions.InvalidSubjectError as exc:
            raise TokenError(TokenErrorKind.INVALID_SUBJECT, str(exc)) from exc
        except jwt.MissingRequiredClaimError as exc:
            if exc.claim == "sub":
                raise TokenError(TokenErrorKind.INVALID_SUBJECT, str(exc)) from exc
            raise TokenError(TokenErrorKind.MALFORMED, str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenError(TokenErrorKind.MALFORMED, str(exc)) from exc

        try:
            return uuid.UUID(payload["sub"])
        except (ValueError, TypeError, AttributeError) as exc:
            raise TokenError(TokenErrorKind.INVALID_SUBJECT, "subject is not a user id") from exc
