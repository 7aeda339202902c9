"""Tests for authentication endpoints."""
import pytest
from readtrace.services.auth import AuthService, RegistrationError

TEST_PASSWORD = "TestPass1!"


def test_register(client):
    response = client.post("/api/auth/register", json={
        "email": "  New.Reader@Example.com ",
        "password": TEST_PASSWORD,
        "username": "new_reader",
    })

    assert response.status_code == 201
    data = response.json()
    assert "token" in data
    assert data["user"]["email"] == "new.reader@example.com"
    assert data["user"]["preferred_platforms"] == ["mangadex"]


def test_register_duplicate_email(client, test_user):
    response = client.post("/api/auth/register", json={"email": "READER@example.com", "password": TEST_PASSWORD})
    assert response.status_code == 409


@pytest.mark.parametrize("email,password", [
    ("not-an-email", TEST_PASSWORD),
    ("someone@mailinator.com", TEST_PASSWORD),
    ("a..b@example.com", TEST_PASSWORD),
    ("ok@example.com", "short1!"),
    ("ok@example.com", "alllowercase1!"),
    ("ok@example.com", "Password1"),
])
def test_register_validation(client, email, password):
    response = client.post("/api/auth/register", json={"email": email, "password": password})
    assert response.status_code == 400


def test_login_success(client, test_user):
    """Test successful login."""
    response = client.post(
        "/api/auth/login",
        json={"email": "reader@example.com", "password": TEST_PASSWORD},
    )

    assert response.status_code == 200
    data = response.json()
    assert "token" in data
    assert data["user"]["username"] == "reader"


def test_login_invalid_password(client, test_user):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login",
        json={"email": "reader@example.com", "password": "wrongpass"},
    )

    assert response.status_code == 401


def test_login_invalid_user(client):
    """Test login with non-existent user."""
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": TEST_PASSWORD},
    )

    assert response.status_code == 401


def test_get_me(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["email"] == "reader@example.com"


def test_get_me_unauthorized(client):
    """Test getting current user without auth."""
    response = client.get("/api/auth/me")
    assert response.status_code == 401


def test_get_me_bad_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_logout(client, auth_headers):
    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200


def test_token_round_trip(db, test_user):
    auth = AuthService(db)
    assert auth.decode_token(auth.create_token(test_user.id)) == test_user.id
    assert auth.decode_token("garbage") is None


def test_register_username_taken(db, test_user):
    auth = AuthService(db)
    with pytest.raises(RegistrationError) as exc:
        auth.register("fresh@example.com", TEST_PASSWORD, username="READER")
    assert exc.value.conflict
