from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, Request

from app.models.user import User
from app.connections.context import AppContext, get_context
from app.utils.errors import InvalidTokenError, UnauthenticatedError


@dataclass(frozen=True)
class Session:
    """The authenticated caller and the exact token it presented."""
    user: User
    token: str


def authenticate(
    request: Request,
    x_auth: str | None = Header(default=None),
    context: AppContext = Depends(get_context),
) -> Session:
    """Auth dependency that resolves the `x-auth` header to a user.

    Missing, malformed, forged and revoked tokens all end in the same 401.
    The resolved user and raw token are also left on `request.state`.
    """
    if not x_auth:
        raise UnauthenticatedError()
    try:
        user = context.users.find_by_session_token(x_auth)
    except InvalidTokenError:
        raise UnauthenticatedError()

    request.state.user = user
    request.state.token = x_auth
    return Session(user=user, token=x_auth)
