"""API endpoint tests for health, accounts and error rendering."""

TEST_PASSWORD = "Secret#123"  # noqa: S105

SIGNUP = {
    "name": "New User With A Long Name",
    "email": "newuser@example.com",
    "address": "5 Signup Lane",
    "password": TEST_PASSWORD,
}


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_signup_creates_normal_user(client):
    """Test signup always creates a normal user."""
    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "role": "admin"})
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["user"]["role"] == "normal_user"
    assert data["user"]["address"] == "5 Signup Lane"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]


def test_signup_duplicate_email(client, auth_headers):
    """Test signup with duplicate email is a conflict."""
    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "email": auth_headers.email})
    assert response.status_code == 409
    assert response.json() == {"detail": "Email already registered", "kind": "conflict"}


def test_signup_short_name_rejected(client):
    """Test names shorter than 20 characters are rejected."""
    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "name": "Too Short"})
    assert response.status_code == 422
    assert response.json()["kind"] == "validation_error"


def test_signup_weak_password_rejected(client):
    """Test passwords need an uppercase letter and a special character."""
    for password in ["alllower#1", "NoSpecial123", "Sh#1", "Much#TooLongPassword1"]:
        response = client.post("/api/v1/auth/signup", json={**SIGNUP, "password": password})
        assert response.status_code == 422, password


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()
    assert response.json()["user"]["id"] == auth_headers.user_id


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthorized"
    assert response.headers["www-authenticate"] == "Bearer"


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email


def test_missing_token(client):
    """Test requests without a token are unauthorized."""
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthorized"


def test_invalid_token(client):
    """Test requests with a garbage token are unauthorized."""
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_token_for_missing_user(client):
    """Test a valid token for a user that no longer exists is unauthorized."""
    from src.services.auth import create_access_token

    token = create_access_token(99999, "normal_user")
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


def test_change_password(client, auth_headers):
    """Test changing the password replaces the old one."""
    response = client.put(
        "/api/v1/auth/password",
        headers=auth_headers,
        json={"current_password": TEST_PASSWORD, "new_password": "Fresh!Pass9"},
    )
    assert response.status_code == 204

    old_login = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD}
    )
    assert old_login.status_code == 401

    new_login = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "Fresh!Pass9"}
    )
    assert new_login.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    """Test the current password must match."""
    response = client.put(
        "/api/v1/auth/password",
        headers=auth_headers,
        json={"current_password": "Wrong#Pass1", "new_password": "Fresh!Pass9"},
    )
    assert response.status_code == 401
