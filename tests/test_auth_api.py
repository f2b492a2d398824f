from conftest import TestingSessionLocal, auth
from db.models import User

NEW_USER = {"name": "Alice", "email": "Alice@Example.com", "password": "s3cret!", "company": "Lumen"}


def register(client, **overrides):
    return client.post("/api/auth/register", json=dict(NEW_USER, **overrides))


def test_register_returns_token_and_profile(client):
    response = register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["role"] == "user"
    assert "password" not in body["user"]
    assert "hashedPassword" not in body["user"]


def test_register_duplicate_email(client):
    register(client)

    response = register(client, email="alice@example.com")

    assert response.status_code == 400
    assert response.json()["error"] == "User already exists with this email"


def test_register_validates_fields(client):
    assert register(client, email="not-an-email").status_code == 400
    assert register(client, password="123").status_code == 400


def test_login(client):
    register(client)

    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "s3cret!"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["lastLogin"] is not None
    profile = client.get("/api/auth/profile", headers=auth(body["token"]))
    assert profile.json()["user"]["name"] == "Alice"


def test_login_with_wrong_password(client):
    register(client)

    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


def test_login_with_deactivated_account(client):
    register(client)
    with TestingSessionLocal() as db:
        db.query(User).filter(User.email == "alice@example.com").update({"is_active": False})
        db.commit()

    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "s3cret!"})

    assert response.status_code == 401
    assert response.json()["error"] == "Account is deactivated"


def test_update_profile(client):
    token = register(client).json()["token"]

    response = client.put("/api/auth/profile", json={"company": "Lumen Labs"}, headers=auth(token))

    assert response.status_code == 200
    assert response.json()["user"]["company"] == "Lumen Labs"
    assert response.json()["user"]["name"] == "Alice"


def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized, no token provided"
