from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import jwt, JOSEError
from passlib.context import CryptContext
from pydantic import BaseModel

from app.utils.errors import InvalidTokenError


DEFAULT_BCRYPT_ROUNDS = 10


def make_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    """Build a bcrypt context whose digests embed salt and the given cost."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


pwd_context = make_password_context()


class TokenClaims(BaseModel):
    """Identity carried by a verified session token."""
    subject_id: str
    access_level: str


def hash_password(plain: str, context: CryptContext = pwd_context) -> str:
    """Hash a plaintext password using bcrypt with a fresh salt."""
    return context.hash(plain)


def verify_password(plain: str, hashed: str, context: CryptContext = pwd_context) -> bool:
    """Verify plaintext password against a bcrypt hash.

    A digest passlib cannot identify counts as a mismatch.
    """
    try:
        return context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def issue_token(
    subject_id: str,
    access_level: str,
    secret: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT with subject and access level, optionally expiring.

    The random `jti` makes every token distinct, so two sessions of one user
    can be revoked independently.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject_id,
        "access": access_level,
        "iat": int(now.timestamp()),
        "jti": uuid4().hex,
    }
    if expires_delta is not None:
        payload["exp"] = int((now + expires_delta).timestamp())
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Decode a session token, rejecting bad signatures, garbage and expired tokens.

    Every failure raises `InvalidTokenError` without saying which check failed.
    """
    if not isinstance(token, str) or not token:
        raise InvalidTokenError("Invalid token")
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JOSEError:
        raise InvalidTokenError("Invalid token")

    subject_id = payload.get("sub")
    access_level = payload.get("access")
    if not isinstance(subject_id, str) or not isinstance(access_level, str):
        raise InvalidTokenError("Invalid token")
    return TokenClaims(subject_id=subject_id, access_level=access_level)
