from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=50)
    email: str = Field(max_length=100)
    password_hash: str  # bcrypt, never the plaintext
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
