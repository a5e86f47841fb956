import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.auth import TokenService, hash_password
from app.database import get_session
from app.main import app
from app.models.user import User

TEST_PASSWORD = "testpass123"


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def token_service() -> TokenService:
    return app.state.token_service


@pytest.fixture
def user(session: Session) -> User:
    user = User(
        username="testuser",
        email="testuser@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user_token(client: TestClient, user: User) -> str:
    response = client.post(
        "/auth/login",
        json={"username": user.username, "password": TEST_PASSWORD},
    )
    return response.text
