from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.errors import Unauthenticated

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        return False


@dataclass(frozen=True)
class TokenService:
    """Issues and verifies HS256 tokens whose subject is the username.

    Built once at start-up from settings; holds no per-session state, so any
    process sharing the secret can verify any token.
    """

    secret_key: str
    expire_minutes: int = 24 * 60
    algorithm: str = ALGORITHM

    @property
    def lifetime(self) -> timedelta:
        return timedelta(minutes=self.expire_minutes)

    def issue(self, username: str, issued_at: datetime | None = None) -> str:
        issued_at = issued_at or datetime.now(UTC)
        return jwt.encode(
            {"sub": username, "iat": issued_at, "exp": issued_at + self.lifetime},
            self.secret_key,
            algorithm=self.algorithm,
        )

    def verify(self, token: str) -> str:
        """Return the token's subject, or raise ``Unauthenticated``."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError:
            raise Unauthenticated("Token has expired")
        except JWTError:
            raise Unauthenticated("Invalid token")
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise Unauthenticated("Invalid token")
        return subject
