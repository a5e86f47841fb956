from fastapi.testclient import TestClient
from sqlmodel import Session


def test_me_requires_token(client: TestClient):
    response = client.get("/users/me")
    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


def test_me_with_token(client: TestClient, user, user_token: str):
    response = client.get(
        "/users/me",
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data == {"id": user.id, "username": "testuser", "email": "testuser@example.com"}
    assert "password_hash" not in data


def test_me_for_deleted_user(
    client: TestClient, session: Session, user, user_token: str
):
    session.delete(user)
    session.commit()
    response = client.get(
        "/users/me",
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 401
    assert response.json() == {"detail": "User not found"}
