from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from mongoengine.errors import OperationError
from mongoengine.errors import ValidationError as DocumentValidationError
from pymongo.errors import PyMongoError

from app.utils.logging import get_logger


logger = get_logger(__name__)


class AppError(Exception):
    """Base for errors the API maps onto a status code.

    Errors with `expose_detail` set answer with `{"detail": message}`;
    the others answer with an empty body.
    """
    status_code: int = 400
    expose_detail: bool = True

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input fields."""


class DuplicateEmailError(AppError):
    """Registration with an email that already belongs to a user."""


class AuthenticationError(AppError):
    """Unknown email or wrong password."""


class InvalidTokenError(AppError):
    """Session token is malformed, forged, expired or revoked."""
    status_code = 401
    expose_detail = False


class UnauthenticatedError(AppError):
    """Gated route called without a usable session token."""
    status_code = 401
    expose_detail = False


class NotFoundError(AppError):
    """Resource is absent, not owned by the caller, or its id is malformed."""
    status_code = 404
    expose_detail = False


def _error_response(status_code: int, detail: str | None = None) -> Response:
    if detail is None:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content={"detail": detail})


async def _handle_app_error(request: Request, exc: AppError) -> Response:
    return _error_response(exc.status_code, exc.message if exc.expose_detail else None)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> Response:
    # Body/query validation shares the 400 of the domain ValidationError
    messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return _error_response(400, "; ".join(messages))


async def _handle_persistence_error(request: Request, exc: Exception) -> Response:
    logger.warning("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(400, "Could not complete the request")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the status-code mapping for domain and persistence errors."""
    app.add_exception_handler(AppError, _handle_app_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(OperationError, _handle_persistence_error)
    app.add_exception_handler(DocumentValidationError, _handle_persistence_error)
    app.add_exception_handler(PyMongoError, _handle_persistence_error)
