from __future__ import annotations

from datetime import timedelta
from typing import Any

from bson.objectid import ObjectId
from mongoengine.errors import NotUniqueError
from mongoengine.errors import ValidationError as DocumentValidationError
from passlib.context import CryptContext

from app.models.user import User
from app.utils.base import AccessLevel
from app.utils.errors import (
    AuthenticationError,
    DuplicateEmailError,
    InvalidTokenError,
    ValidationError,
)
from app.utils.logging import get_logger
from app.services.auth import (
    hash_password,
    issue_token,
    pwd_context,
    verify_password,
    verify_token,
)


logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def to_public_view(user: User) -> dict[str, Any]:
    """The only shape of a user that leaves the API: id and email."""
    return {"id": str(user.id), "email": user.email}


class UserStore:
    """Registered accounts and their session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int | None = None,
        password_context: CryptContext = pwd_context,
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
        self.password_context = password_context

    def save(self, user: User) -> User:
        """Persist a user, hashing the password first if it is new or changed."""
        # mongoengine records every assigned field of a loaded document in
        # _changed_fields until the next save; new documents have no pk yet
        if user.pk is None or "password" in user._changed_fields:
            user.password = hash_password(user.password, self.password_context)
        user.save()
        return user

    def register_user(self, email: str, password: str) -> User:
        email = (email or "").strip()
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = User(email=email, password=password)
        try:
            user.validate()
        except DocumentValidationError as exc:
            raise ValidationError(f"{email!r} is not a valid email") from exc

        # Reject duplicate email signups early; the unique index catches races
        if User.objects(email=email).first():
            raise DuplicateEmailError("Email already registered")
        try:
            self.save(user)
        except NotUniqueError as exc:
            raise DuplicateEmailError("Email already registered") from exc

        logger.info("Registered user %s", user.id)
        return user

    def login(self, email: str, password: str) -> User:
        """Return the user owning these credentials; does not issue a token."""
        user: User | None = User.objects(email=(email or "").strip()).first()
        # Same error for unknown email and wrong password
        if not user or not verify_password(password or "", user.password, self.password_context):
            logger.info("Rejected login attempt")
            raise AuthenticationError("Invalid credentials")
        return user

    def issue_session_token(self, user: User) -> str:
        """Sign a new "auth" token for the user and persist it before returning."""
        access_level = AccessLevel.AUTH.value
        token = issue_token(
            subject_id=str(user.id),
            access_level=access_level,
            secret=self.secret,
            algorithm=self.algorithm,
            expires_delta=self.expires_delta,
        )
        # $push keeps concurrent logins of the same user from overwriting each other
        User._get_collection().update_one(
            {"_id": user.id},
            {"$push": {"tokens": {"access_level": access_level, "token": token}}},
        )
        user.reload("tokens")
        logger.info("Issued session token for user %s", user.id)
        return token

    def revoke_session_token(self, user: User, token: str) -> None:
        User._get_collection().update_one(
            {"_id": user.id},
            {"$pull": {"tokens": {"token": token}}},
        )
        user.reload("tokens")
        logger.info("Revoked session token for user %s", user.id)

    def find_by_session_token(self, token: str) -> User:
        """Resolve a token to its user, requiring it to still be listed on the user.

        The list check is what makes logout effective for tokens whose
        signature still verifies.
        """
        claims = verify_token(token, self.secret, algorithm=self.algorithm)
        if not ObjectId.is_valid(claims.subject_id):
            raise InvalidTokenError("Invalid token")

        user: User | None = User.objects(
            id=claims.subject_id,
            tokens__match={"token": token, "access_level": AccessLevel.AUTH.value},
        ).first()
        if not user:
            raise InvalidTokenError("Invalid token")
        return user
