from flask_jwt_extended import decode_token

from helpers import post_json


# home page welcome text
def test_home_page_returns_welcome(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"Welcome to the Movie Rental API" in response.data

# valid registration test
def test_register_creates_valid_user(client):
    response = post_json(client, "/api/auth/register", {"username": "unit_user", "password": "secret123!"})
    assert response.status_code == 201
    body = response.get_json()
    assert body["message"] == "User registered successfully"
    assert len(body["userId"]) == 24

#duplicate registration test
def test_duplicate_register_is_rejected(client):
    payload = {"username": "dup_user", "password": "secret123!"}
    first = post_json(client, "/api/auth/register", payload)
    second = post_json(client, "/api/auth/register", payload)
    assert first.status_code == 201
    assert "userId" in first.get_json()
    assert second.status_code == 400
    assert second.get_json()["message"] == "User already exists."

#missing fields registration test
def test_register_missing_password(client):
    response = post_json(client, "/api/auth/register", {"username": "lonely"})
    assert response.status_code == 400
    body = response.get_json()
    assert body["message"] == "Invalid input"
    fields = [error["field"] for error in body["errors"]]
    assert "password" in fields

#role outside the allowed set
def test_register_rejects_unknown_role(client):
    payload = {"username": "wannabe", "password": "secret123!", "role": "admin"}
    response = post_json(client, "/api/auth/register", payload)
    assert response.status_code == 400
    role_errors = [error["field"] for error in response.get_json()["errors"]]
    assert role_errors == ["role"]

# VALID LOGIN
def test_login_token_carries_user_id(client, app):
    payload = {"username": "login_user", "password": "Valid123!"}
    user_id = post_json(client, "/api/auth/register", payload).get_json()["userId"]

    response = post_json(client, "/api/auth/login", payload)

    assert response.status_code == 200
    token = response.get_json()["token"]
    with app.app_context():
        claims = decode_token(token)
    assert claims["userId"] == user_id
    assert claims["username"] == "login_user"
    assert claims["role"] == "user"
    assert claims["exp"] - claims["iat"] == 3600

# employee role is embedded in the token
def test_login_token_carries_employee_role(client, app):
    payload = {"username": "employee_one", "password": "Valid123!", "role": "employee"}
    post_json(client, "/api/auth/register", payload)
    response = post_json(client, "/api/auth/login", {"username": "employee_one", "password": "Valid123!"})
    with app.app_context():
        assert decode_token(response.get_json()["token"])["role"] == "employee"

# INVALID PASSWORD
def test_login_with_invalid_password(client):
    post_json(client, "/api/auth/register", {"username": "user2", "password": "Valid123!"})
    response = post_json(client, "/api/auth/login", {"username": "user2", "password": "WrongPass1!"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid credentials"

# USER DOES NOT EXIST
def test_login_user_not_found(client):
    response = post_json(client, "/api/auth/login", {"username": "ghost", "password": "Valid123!"})

    assert response.status_code == 404
    assert response.get_json()["message"] == "User not found"

# MISSING FIELDS
def test_login_missing_fields(client):
    response = post_json(client, "/api/auth/login", {"username": "ghost"})
    assert response.status_code == 400

# the stored record never holds the plain password
def test_password_is_hashed(client, app):
    post_json(client, "/api/auth/register", {"username": "hashed_user", "password": "Valid123!"})
    with app.app_context():
        from services.registry import get_services

        user = get_services().users.find_by_username("hashed_user")
    assert user.password_hash != "Valid123!"
    assert user.password_hash.startswith("$2")
