"""
Name: Auth API Tests

Responsibilities:
  - Register / login / verify / logout / profile / change-password flows
  - Envelope shape on success and on error
  - Session cookie is set on login and cleared on logout
  - Unknown or inactive accounts still run one password verification
"""

from unittest.mock import patch

import pytest

from hr_api.application.usecases.auth import login_user as login_module
from hr_api.identity.users import UserRole, UserStatus

pytestmark = pytest.mark.unit

DEFAULT_PASSWORD = "secret123"


def _register(client, **overrides):
    payload = {
        "name": "Juan Gómez",
        "email": "juan@example.com",
        "password": "secret123",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


class TestRegister:
    def test_register_returns_public_user(self, client):
        response = _register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Usuario registrado exitosamente"
        user = body["data"]["user"]
        assert user["email"] == "juan@example.com"
        assert user["role"] == "client"
        assert user["status"] == "active"
        assert "password_hash" not in user
        assert "password" not in user

    def test_register_normalizes_email(self, client):
        response = _register(client, email="  Juan@Example.COM ")

        assert response.status_code == 201
        assert response.json()["data"]["user"]["email"] == "juan@example.com"

    def test_register_accepts_explicit_role(self, client):
        response = _register(client, role="employee")

        assert response.json()["data"]["user"]["role"] == "employee"

    def test_duplicate_email_is_400(self, client):
        assert _register(client).status_code == 201

        response = _register(client, email="JUAN@example.com")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "El email ya está registrado",
        }

    def test_validation_errors_have_paths(self, client):
        response = _register(client, name="J", email="not-an-email", password="123")

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Error de validación"
        paths = {error["path"] for error in body["errors"]}
        assert {"name", "email", "password"} <= paths


class TestLogin:
    def test_login_sets_cookie_and_returns_token(self, client, employee):
        response = client.post(
            "/api/auth/login",
            json={"email": "ANA@example.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Inicio de sesión exitoso"
        assert body["data"]["token"]
        assert body["data"]["user"]["id"] == str(employee.id)
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("token=")
        assert "httponly" in set_cookie.lower()

    def test_wrong_password_is_401(self, client, employee):
        response = client.post(
            "/api/auth/login",
            json={"email": "ana@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Credenciales inválidas"

    def test_unknown_email_is_401(self, client):
        response = client.post(
            "/api/auth/login",
            json={"email": "ghost@example.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 401

    def test_inactive_user_cannot_login(self, client, make_user):
        make_user(email="off@example.com", status=UserStatus.INACTIVE)

        response = client.post(
            "/api/auth/login",
            json={"email": "off@example.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("status", [None, UserStatus.INACTIVE])
    def test_rejected_account_still_runs_password_hash(self, client, make_user, status):
        if status is not None:
            make_user(email="someone@example.com", status=status)

        with patch.object(
            login_module, "verify_password", return_value=False
        ) as verify:
            response = client.post(
                "/api/auth/login",
                json={"email": "someone@example.com", "password": DEFAULT_PASSWORD},
            )

        assert response.status_code == 401
        verify.assert_called_once_with(
            DEFAULT_PASSWORD, login_module._DUMMY_PASSWORD_HASH
        )


class TestVerify:
    def test_verify_token_from_body(self, client, employee, auth_headers):
        token = auth_headers(employee)["Authorization"].split(" ", 1)[1]

        response = client.post("/api/auth/verify", json={"token": token})

        assert response.status_code == 200
        assert response.json()["message"] == "Token válido"
        assert response.json()["data"]["user"]["email"] == "ana@example.com"

    def test_verify_token_from_cookie(self, client, employee):
        client.post(
            "/api/auth/login",
            json={"email": "ana@example.com", "password": DEFAULT_PASSWORD},
        )

        response = client.post("/api/auth/verify")

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == str(employee.id)

    def test_verify_without_token_is_401(self, client):
        response = client.post("/api/auth/verify", json={})

        assert response.status_code == 401
        assert response.json()["message"] == "Token no proporcionado"

    def test_verify_garbage_token_is_401(self, client):
        response = client.post("/api/auth/verify", json={"token": "garbage"})

        assert response.status_code == 401


class TestSession:
    def test_profile_requires_token(self, client):
        assert client.get("/api/auth/profile").status_code == 401

    def test_profile_returns_caller(self, client, employee, auth_headers):
        response = client.get("/api/auth/profile", headers=auth_headers(employee))

        assert response.status_code == 200
        assert response.json()["data"]["user"]["name"] == "Ana Pérez"

    def test_logout_clears_cookie(self, client, employee, auth_headers):
        response = client.post("/api/auth/logout", headers=auth_headers(employee))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Sesión cerrada exitosamente",
        }
        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("token=")
        assert "max-age=0" in set_cookie

    def test_change_password_then_login_with_new(self, client, employee, auth_headers):
        response = client.post(
            "/api/auth/change-password",
            headers=auth_headers(employee),
            json={"current_password": DEFAULT_PASSWORD, "new_password": "nueva123"},
        )
        assert response.status_code == 200

        old = client.post(
            "/api/auth/login",
            json={"email": "ana@example.com", "password": DEFAULT_PASSWORD},
        )
        new = client.post(
            "/api/auth/login",
            json={"email": "ana@example.com", "password": "nueva123"},
        )
        assert old.status_code == 401
        assert new.status_code == 200

    def test_change_password_with_wrong_current_is_401(
        self, client, employee, auth_headers
    ):
        response = client.post(
            "/api/auth/change-password",
            headers=auth_headers(employee),
            json={"current_password": "nope", "new_password": "nueva123"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "La contraseña actual es incorrecta"


def test_register_then_use_token_for_admin_route(client):
    registered = _register(client, role=UserRole.ADMIN.value, email="boss@example.com")
    assert registered.status_code == 201

    login = client.post(
        "/api/auth/login",
        json={"email": "boss@example.com", "password": "secret123"},
    )
    token = login.json()["data"]["token"]

    response = client.get(
        "/api/users", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
