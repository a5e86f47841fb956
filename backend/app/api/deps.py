from fastapi import Depends, Request
from sqlmodel import Session

from app.auth import TokenService
from app.database import get_session
from app.errors import Unauthenticated
from app.models.user import User
from app.services.credentials import get_user_by_username


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    request: Request,
    session: Session = Depends(get_session),
) -> User:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthenticated()
    user = get_user_by_username(session, identity.username)
    if not user:
        raise Unauthenticated("User not found")
    return user
