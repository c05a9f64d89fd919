from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from app.connections import AppContext, get_context
from app.services.authenticate import Session, authenticate
from app.services.users import to_public_view


router = APIRouter()


class SignupBody(BaseModel):
    email: str
    password: str


class LoginBody(BaseModel):
    email: str
    password: str


@router.post("")
def signup(
    body: SignupBody,
    response: Response,
    context: AppContext = Depends(get_context),
) -> dict:
    """PUBLIC: Register and log in; the session token comes back in `x-auth`."""
    user = context.users.register_user(body.email, body.password)
    response.headers["x-auth"] = context.users.issue_session_token(user)
    return to_public_view(user)


@router.get("/me")
def me(session: Session = Depends(authenticate)) -> dict:
    """PROTECTED: The caller's own account."""
    return to_public_view(session.user)


@router.post("/login")
def login(
    body: LoginBody,
    response: Response,
    context: AppContext = Depends(get_context),
) -> dict:
    """PUBLIC: Exchange credentials for a new session token in `x-auth`."""
    user = context.users.login(body.email, body.password)
    response.headers["x-auth"] = context.users.issue_session_token(user)
    return to_public_view(user)


@router.delete("/me/token")
def logout(
    session: Session = Depends(authenticate),
    context: AppContext = Depends(get_context),
) -> Response:
    """PROTECTED: Revoke only the token used for this request."""
    context.users.revoke_session_token(session.user, session.token)
    return Response(status_code=200)
