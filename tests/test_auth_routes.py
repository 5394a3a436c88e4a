# =============================================================================
# tests/test_auth_routes.py - /auth endpoint tests
# =============================================================================

from .fakes import bearer


def test_root_banner(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text.startswith("Mini Todo API")


def test_health_counts_records(client, register):
    register("alice", "secret123")

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "users": 1, "tasks": 0}


def test_register_returns_token_and_public_user(client, tokens):
    response = client.post("/auth/register", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"] == {"id": 1, "username": "alice"}
    assert tokens.verify(data["token"]).user_id == 1


def test_register_duplicate_is_409(client, register, users):
    register("alice", "secret123")

    response = client.post("/auth/register", json={"username": "alice", "password": "x"})

    assert response.status_code == 409
    assert response.json() == {"error": "username taken", "code": "USERNAME_TAKEN"}
    assert users.count() == 1


def test_register_missing_fields_is_400(client):
    for body in ({}, {"username": "alice"}, {"username": "", "password": "secret123"}):
        response = client.post("/auth/register", json=body)
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"


def test_register_without_body_is_400(client):
    response = client.post("/auth/register")

    assert response.status_code == 400


def test_register_wrong_type_is_400(client):
    response = client.post("/auth/register", json={"username": 12, "password": "secret123"})

    assert response.status_code == 400
    assert response.json()["details"]


def test_login_returns_token_for_registered_user(client, register, tokens):
    _, user = register("alice", "secret123")

    response = client.post("/auth/login", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"] == user
    identity = tokens.verify(data["token"])
    assert (identity.user_id, identity.username) == (user["id"], "alice")


def test_login_failures_are_uniform(client, register):
    register("alice", "secret123")

    wrong_password = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/auth/login", json={"username": "bob", "password": "secret123"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {
        "error": "invalid credentials",
        "code": "INVALID_CREDENTIALS",
    }


def test_login_missing_fields_is_400(client):
    response = client.post("/auth/login", json={"username": "alice"})

    assert response.status_code == 400


def test_me_returns_identity(client, register):
    token, user = register("alice", "secret123")

    response = client.get("/auth/me", headers=bearer(token))

    assert response.status_code == 200
    assert response.json() == user


def test_me_without_token_is_401(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json() == {"error": "unauthorized", "code": "UNAUTHORIZED"}
