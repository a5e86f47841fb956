from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, field_validator
from sqlmodel import Session

from app.api.deps import get_token_service
from app.auth import TokenService
from app.database import get_session
from app.services import credentials

router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
BCRYPT_MAX_BYTES = 72


class SignupRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: str = Field(min_length=3, max_length=100, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=BCRYPT_MAX_BYTES)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


@router.post("/signup", response_class=PlainTextResponse)
def signup(body: SignupRequest, session: Session = Depends(get_session)):
    credentials.register(session, body.username, body.email, body.password)
    return "User registered successfully!"


@router.post("/login", response_class=PlainTextResponse)
def login(
    body: LoginRequest,
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
):
    user = credentials.authenticate(session, body.username, body.password)
    return tokens.issue(user.username)
