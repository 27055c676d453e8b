"""API endpoint tests: health, signup, login and profile."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from src.config import get_settings
from src.services.auth import create_access_token, create_oauth_state


def _signup_body(**overrides):
    body = {
        "username": "newuser",
        "email": "newuser@example.com",
        "password": "password123",
        "firstName": "New",
        "lastName": "User",
        "dateOfBirth": "1988-02-29",
        "sports": ["swimming"],
        "allergies": [],
    }
    body.update(overrides)
    return body


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["message"] == "Server is running"
    assert "environment" in data


def test_signup(client):
    """Test user signup returns a token and the new user."""
    response = client.post("/api/auth/signup", json=_signup_body())
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User created successfully"
    assert data["token"]
    assert data["userId"] == data["user"]["id"]
    assert data["user"]["username"] == "newuser"
    assert data["user"]["firstName"] == "New"
    assert data["user"]["sports"] == ["swimming"]
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]


def test_signup_requires_a_sport(client):
    """Test signup with an empty sports list fails validation."""
    response = client.post("/api/auth/signup", json=_signup_body(sports=[]))
    assert response.status_code == 400
    data = response.json()
    assert data["detail"] == "Validation failed"
    assert any(error["field"] == "sports" for error in data["errors"])


def test_signup_rejects_bad_username(client):
    """Test usernames are limited to letters, digits and underscores."""
    response = client.post("/api/auth/signup", json=_signup_body(username="bad name!"))
    assert response.status_code == 400


def test_signup_rejects_short_password(client):
    """Test passwords need at least 8 characters."""
    response = client.post("/api/auth/signup", json=_signup_body(password="short"))
    assert response.status_code == 400


def test_signup_duplicate_email(client, auth_headers):
    """Test signup with an email that is already registered fails."""
    response = client.post(
        "/api/auth/signup",
        json=_signup_body(username="someoneelse", email=auth_headers.email),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Username or email already exists"


def test_signup_duplicate_username(client, auth_headers):
    """Test signup with a taken username fails."""
    response = client.post(
        "/api/auth/signup",
        json=_signup_body(username="testuser", email="fresh@example.com"),
    )
    assert response.status_code == 400


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["token"]
    assert data["user"]["id"] == auth_headers.user_id


def test_login_token_works(client, auth_headers):
    """Test the token returned by login authenticates the user."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    token = response.json()["token"]

    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == auth_headers.email


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(client):
    """Test login for an email nobody registered."""
    response = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever123"}
    )
    assert response.status_code == 401


def test_get_profile(client, auth_headers):
    """Test getting the current user's profile."""
    response = client.get("/api/auth/profile", headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == auth_headers.email
    assert user["dateOfBirth"] == "1990-05-17"
    assert user["allergies"] == ["shellfish"]
    assert user["height"] is None


def test_update_profile(client, auth_headers):
    """Test replacing the editable profile fields."""
    response = client.put(
        "/api/auth/profile",
        headers=auth_headers,
        json={
            "firstName": "Updated",
            "lastName": "Name",
            "dateOfBirth": "1991-01-01",
            "height": "180 cm",
            "weight": "75 kg",
            "sports": ["triathlon"],
            "allergies": [],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Profile updated successfully"
    assert data["user"]["firstName"] == "Updated"
    assert data["user"]["height"] == "180 cm"
    assert data["user"]["sports"] == ["triathlon"]

    response = client.get("/api/auth/profile", headers=auth_headers)
    assert response.json()["user"]["weight"] == "75 kg"
    assert response.json()["user"]["allergies"] == []


def test_update_profile_requires_a_sport(client, auth_headers):
    """Test a profile update cannot clear the sports list."""
    response = client.put(
        "/api/auth/profile",
        headers=auth_headers,
        json={
            "firstName": "Test",
            "lastName": "User",
            "dateOfBirth": "1990-05-17",
            "sports": [],
            "allergies": [],
        },
    )
    assert response.status_code == 400


def test_missing_token(client):
    """Test protected endpoints reject requests without a token."""
    response = client.get("/api/auth/profile")
    assert response.status_code == 401
    assert response.json()["detail"] == "No token provided"


def test_malformed_token(client):
    """Test a token that is not a JWT is rejected."""
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_token_with_non_numeric_subject(client):
    """Test a signed token whose subject is not a user id is rejected."""
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": "not-a-number",
            "type": "access",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_expired_token(client, auth_headers):
    """Test an expired token is rejected."""
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": str(auth_headers.user_id),
            "type": "access",
            "exp": datetime.now(UTC) - timedelta(minutes=1),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_signed_with_other_secret(client, auth_headers):
    """Test a token signed with a different secret is rejected."""
    token = jwt.encode(
        {
            "sub": str(auth_headers.user_id),
            "type": "access",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
        },
        "some-other-secret",
        algorithm="HS256",
    )
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_oauth_state_is_not_an_access_token(client, auth_headers):
    """Test the Strava OAuth state cannot be used as a bearer token."""
    state = create_oauth_state(auth_headers.user_id)
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {state}"})
    assert response.status_code == 401


def test_token_for_deleted_user(client):
    """Test a valid token for a user that no longer exists."""
    token = create_access_token(99999)
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"
