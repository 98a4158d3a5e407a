"""
Name: Auth Route Tests

Responsibilities:
  - Validate login success/failure against the directory's User records
  - Ensure /auth/me reflects the session claims
  - Ensure logout clears the cookie
"""

import pytest
from employee_directory.api.auth_routes import router as auth_router
from employee_directory.api.exception_handlers import register_exception_handlers
from employee_directory.container import get_directory_repository, get_password_hasher
from factories import add_pair
from fastapi import FastAPI
from fastapi.testclient import TestClient

pytestmark = pytest.mark.unit


@pytest.fixture
def client(repository, password_hasher):
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(auth_router)
    app.dependency_overrides[get_directory_repository] = lambda: repository
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher
    add_pair(repository, "Ada", "Lovelace", password="secret")
    return TestClient(app)


def test_login_ok_sets_cookie(client):
    response = client.post(
        "/auth/login", json={"username": " Ada_Lovelace ", "password": "secret"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["access_token"]
    assert body["token_type"] == "bearer"
    assert body["user"] == {
        "username": "Ada_Lovelace",
        "email": "ada.lovelace@corp.test",
        "role": "Employee",
    }
    assert response.cookies.get("access_token") == body["access_token"]


def test_login_fail_wrong_password(client):
    response = client.post(
        "/auth/login", json={"username": "Ada_Lovelace", "password": "wrong"}
    )

    assert response.status_code == 401
    assert "Credenciales" in response.json()["detail"]


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


def test_me_after_login_uses_cookie(client):
    client.post("/auth/login", json={"username": "Ada_Lovelace", "password": "secret"})

    response = client.get("/auth/me")

    assert response.status_code == 200
    assert response.json() == {"username": "Ada_Lovelace", "role": "Employee"}


def test_logout_clears_cookie(client):
    client.post("/auth/login", json={"username": "Ada_Lovelace", "password": "secret"})

    response = client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert "access_token=" in response.headers["set-cookie"]
    assert client.get("/auth/me").status_code == 401
