"""
Name: Users API Tests

Responsibilities:
  - Public projection (never leaks password_hash)
  - Admin-only CRUD, self-service profile
  - Soft delete keeps the email reserved
"""

import pytest

pytestmark = pytest.mark.unit


def test_list_users_never_exposes_secrets(client, admin, employee, auth_headers):
    response = client.get("/api/users", headers=auth_headers(employee))

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 2
    for user in body["data"]:
        assert set(user) >= {"id", "name", "email", "role", "status"}
        assert "password_hash" not in user


def test_admin_creates_user(client, admin, auth_headers):
    response = client.post(
        "/api/users",
        headers=auth_headers(admin),
        json={
            "name": "Lucía Gómez",
            "email": "Lucia@Example.com",
            "password": "secret123",
            "role": "employee",
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "lucia@example.com"
    assert data["role"] == "employee"
    assert data["status"] == "active"


def test_employee_cannot_create_user(client, employee, auth_headers):
    response = client.post(
        "/api/users",
        headers=auth_headers(employee),
        json={"name": "Otro", "email": "otro@example.com", "password": "secret123"},
    )

    assert response.status_code == 403


def test_search_requires_non_empty_q(client, employee, auth_headers):
    response = client.get("/api/users/search", headers=auth_headers(employee))

    assert response.status_code == 400
    assert response.json()["message"] == "Parámetro de búsqueda requerido"


def test_search_matches_name_or_email(client, employee, make_user, auth_headers):
    make_user(name="Mario Bros", email="mario@example.com")

    response = client.get("/api/users/search?q=ANA", headers=auth_headers(employee))

    assert [u["email"] for u in response.json()["data"]] == ["ana@example.com"]


def test_users_by_role(client, admin, employee, auth_headers):
    response = client.get("/api/users/role/admin", headers=auth_headers(employee))

    assert [u["id"] for u in response.json()["data"]] == [str(admin.id)]


def test_unknown_role_is_400(client, employee, auth_headers):
    response = client.get("/api/users/role/owner", headers=auth_headers(employee))

    assert response.status_code == 400


def test_soft_delete_hides_user_and_keeps_email(client, admin, employee, auth_headers):
    headers = auth_headers(admin)

    deleted = client.delete(f"/api/users/{employee.id}", headers=headers)
    assert deleted.status_code == 200

    assert client.get(f"/api/users/{employee.id}", headers=headers).status_code == 404
    listing = client.get("/api/users", headers=headers).json()
    assert str(employee.id) not in [u["id"] for u in listing["data"]]

    reused = client.post(
        "/api/users",
        headers=headers,
        json={"name": "Ana Bis", "email": "ana@example.com", "password": "secret123"},
    )
    assert reused.status_code == 400


def test_update_email_taken_by_other_is_400(client, admin, employee, auth_headers):
    response = client.put(
        f"/api/users/{employee.id}",
        headers=auth_headers(admin),
        json={"email": "admin@example.com"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "El email ya está registrado por otro usuario"


def test_update_profile_changes_only_caller(client, employee, auth_headers):
    response = client.put(
        "/api/profile",
        headers=auth_headers(employee),
        json={"name": "Ana María Pérez"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == str(employee.id)
    assert data["name"] == "Ana María Pérez"
    assert data["role"] == "employee"
