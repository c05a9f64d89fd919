from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from app.utils.config import Settings
from app.services.auth import make_password_context
from app.services.todos import TodoStore
from app.services.users import UserStore


@dataclass(frozen=True)
class AppContext:
    """Everything a request handler needs, built once by the entry point."""
    settings: Settings
    users: UserStore
    todos: TodoStore


def build_context(settings: Settings) -> AppContext:
    users = UserStore(
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.session_token_expires_minutes,
        password_context=make_password_context(settings.bcrypt_rounds),
    )
    return AppContext(settings=settings, users=users, todos=TodoStore())


def get_context(request: Request) -> AppContext:
    return request.app.state.context
