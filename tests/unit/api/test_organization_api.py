"""
Name: Organization API Tests (departments, positions, camps)

Responsibilities:
  - Admin-only writes, reads for any authenticated user
  - Soft delete with dependents check (department -> positions -> users)
  - include_deleted reserved to admins
  - Camp employee assignment rules
"""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from hr_api.identity.users import UserRole, UserStatus

pytestmark = pytest.mark.unit


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


@pytest.fixture
def employee_headers(employee, auth_headers):
    return auth_headers(employee)


def _create_department(client, headers, name="Operaciones", **extra):
    response = client.post(
        "/api/departments", headers=headers, json={"name": name, **extra}
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def _create_position(client, headers, department_id, name="Supervisor", **extra):
    response = client.post(
        "/api/positions",
        headers=headers,
        json={"name": name, "department_id": department_id, **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


# =============================================================================
# Departments
# =============================================================================


class TestDepartments:
    def test_create_and_get(self, client, admin_headers, employee_headers):
        created = _create_department(
            client, admin_headers, name="  Logística ", description="Depósitos"
        )

        assert created["name"] == "Logística"
        assert created["status"] == "active"
        assert created["is_deleted"] is False

        response = client.get(
            f"/api/departments/{created['id']}", headers=employee_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Departamento obtenido exitosamente"

    def test_employee_cannot_create(self, client, employee_headers):
        response = client.post(
            "/api/departments", headers=employee_headers, json={"name": "Ventas"}
        )

        assert response.status_code == 403

    def test_duplicate_name_is_400(self, client, admin_headers):
        _create_department(client, admin_headers, name="Ventas")

        response = client.post(
            "/api/departments", headers=admin_headers, json={"name": "Ventas"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "El nombre del departamento ya existe"

    def test_delete_blocked_while_positions_exist(self, client, admin_headers):
        department = _create_department(client, admin_headers)
        _create_position(client, admin_headers, department["id"])

        response = client.delete(
            f"/api/departments/{department['id']}", headers=admin_headers
        )

        assert response.status_code == 400
        assert "cargos" in response.json()["message"]

    def test_soft_delete_hides_by_default(self, client, admin_headers):
        department = _create_department(client, admin_headers)

        response = client.delete(
            f"/api/departments/{department['id']}", headers=admin_headers
        )
        assert response.status_code == 200

        assert (
            client.get(
                f"/api/departments/{department['id']}", headers=admin_headers
            ).status_code
            == 404
        )
        with_deleted = client.get(
            f"/api/departments/{department['id']}?include_deleted=true",
            headers=admin_headers,
        )
        assert with_deleted.status_code == 200
        assert with_deleted.json()["data"]["is_deleted"] is True

        listing = client.get("/api/departments", headers=admin_headers).json()
        assert listing["data"] == []
        assert listing["pagination"]["total"] == 0

    def test_deleted_name_cannot_be_reused(self, client, admin_headers):
        department = _create_department(client, admin_headers, name="Archivo")
        client.delete(f"/api/departments/{department['id']}", headers=admin_headers)

        response = client.post(
            "/api/departments", headers=admin_headers, json={"name": "Archivo"}
        )

        assert response.status_code == 400

    def test_include_deleted_is_admin_only(self, client, employee_headers):
        response = client.get(
            "/api/departments?include_deleted=true", headers=employee_headers
        )

        assert response.status_code == 403

    def test_list_is_paginated(self, client, admin_headers):
        for index in range(12):
            _create_department(client, admin_headers, name=f"Departamento {index:02d}")

        response = client.get("/api/departments?page=2&limit=5", headers=admin_headers)

        body = response.json()
        assert response.status_code == 200
        assert len(body["data"]) == 5
        assert body["pagination"] == {
            "total": 12,
            "page": 2,
            "limit": 5,
            "totalPages": 3,
        }

    def test_limit_above_max_is_400(self, client, admin_headers):
        response = client.get("/api/departments?limit=1000", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["path"] == "limit"

    def test_search_requires_q(self, client, admin_headers):
        response = client.get("/api/departments/search?q=%20", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Parámetro de búsqueda requerido"

    def test_search_is_case_insensitive(self, client, admin_headers):
        _create_department(client, admin_headers, name="Recursos Humanos")
        _create_department(client, admin_headers, name="Sistemas")

        response = client.get("/api/departments/search?q=humanos", headers=admin_headers)

        names = [item["name"] for item in response.json()["data"]]
        assert names == ["Recursos Humanos"]

    def test_statistics_counts_positions(self, client, admin_headers):
        department = _create_department(client, admin_headers)
        _create_position(client, admin_headers, department["id"], name="Analista")
        _create_position(client, admin_headers, department["id"], name="Jefe")

        response = client.get(
            "/api/departments/statistics/general", headers=admin_headers
        )

        data = response.json()["data"]
        assert data["total"] == 1
        assert data["active"] == 1
        assert data["positions_per_department"] == [
            {"id": department["id"], "name": "Operaciones", "position_count": 2}
        ]

    def test_unknown_id_is_404(self, client, admin_headers):
        response = client.get(f"/api/departments/{uuid4()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Departamento no encontrado"

    def test_malformed_id_is_400(self, client, admin_headers):
        response = client.get("/api/departments/not-a-uuid", headers=admin_headers)

        assert response.status_code == 400


# =============================================================================
# Positions
# =============================================================================


class TestPositions:
    def test_create_includes_department_summary(self, client, admin_headers):
        department = _create_department(client, admin_headers)

        position = _create_position(
            client, admin_headers, department["id"], base_salary="1500.50"
        )

        assert Decimal(str(position["base_salary"])) == Decimal("1500.50")
        assert position["department"] == {
            "id": department["id"],
            "name": "Operaciones",
        }

    def test_default_salary_is_zero(self, client, admin_headers):
        department = _create_department(client, admin_headers)

        position = _create_position(client, admin_headers, department["id"])

        assert Decimal(str(position["base_salary"])) == Decimal("0")

    def test_negative_salary_is_400(self, client, admin_headers):
        department = _create_department(client, admin_headers)

        response = client.post(
            "/api/positions",
            headers=admin_headers,
            json={
                "name": "Cadete",
                "department_id": department["id"],
                "base_salary": "-1",
            },
        )

        assert response.status_code == 400

    def test_unknown_department_is_404(self, client, admin_headers):
        response = client.post(
            "/api/positions",
            headers=admin_headers,
            json={"name": "Cadete", "department_id": str(uuid4())},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Departamento no encontrado"

    def test_delete_blocked_while_users_hold_it(
        self, client, admin_headers, make_user
    ):
        department = _create_department(client, admin_headers)
        position = _create_position(client, admin_headers, department["id"])
        make_user(position_id=UUID(position["id"]))

        response = client.delete(
            f"/api/positions/{position['id']}", headers=admin_headers
        )

        assert response.status_code == 400

    def test_delete_without_users_then_department_delete(self, client, admin_headers):
        department = _create_department(client, admin_headers)
        position = _create_position(client, admin_headers, department["id"])

        assert (
            client.delete(
                f"/api/positions/{position['id']}", headers=admin_headers
            ).status_code
            == 200
        )
        # R: a deleted position no longer blocks its department.
        assert (
            client.delete(
                f"/api/departments/{department['id']}", headers=admin_headers
            ).status_code
            == 200
        )

    def test_employees_of_position(self, client, admin_headers, make_user):
        department = _create_department(client, admin_headers)
        position = _create_position(client, admin_headers, department["id"])
        holder = make_user(name="Carla Díaz", position_id=UUID(position["id"]))

        response = client.get(
            f"/api/positions/{position['id']}/employees", headers=admin_headers
        )

        data = response.json()["data"]
        assert [item["id"] for item in data] == [str(holder.id)]
        assert "password_hash" not in data[0]

    def test_by_department(self, client, admin_headers):
        ops = _create_department(client, admin_headers, name="Operaciones")
        sales = _create_department(client, admin_headers, name="Ventas")
        _create_position(client, admin_headers, ops["id"], name="Operario")
        _create_position(client, admin_headers, sales["id"], name="Vendedor")

        response = client.get(
            f"/api/positions/department/{sales['id']}", headers=admin_headers
        )

        assert [item["name"] for item in response.json()["data"]] == ["Vendedor"]




# =============================================================================
# Camps
# =============================================================================


class TestCamps:
    def test_create_assign_and_remove(
        self, client, admin_headers, employee, employee_headers
    ):
        created = client.post(
            "/api/camps", headers=admin_headers, json={"name": "Campamento Norte"}
        )
        assert created.status_code == 201
        camp_id = created.json()["data"]["id"]

        assigned = client.post(
            f"/api/camps/{camp_id}/assign-employee",
            headers=admin_headers,
            json={"employee_id": str(employee.id)},
        )
        assert assigned.status_code == 200
        assert assigned.json()["data"]["employee"]["name"] == "Ana Pérez"

        by_employee = client.get(
            f"/api/camps/employee/{employee.id}", headers=employee_headers
        )
        assert [c["id"] for c in by_employee.json()["data"]] == [camp_id]

        removed = client.delete(
            f"/api/camps/{camp_id}/remove-employee", headers=admin_headers
        )
        assert removed.status_code == 200
        assert removed.json()["data"]["employee_id"] is None

    def test_remove_without_employee_is_400(self, client, admin_headers):
        camp_id = client.post(
            "/api/camps", headers=admin_headers, json={"name": "Campamento Sur"}
        ).json()["data"]["id"]

        response = client.delete(
            f"/api/camps/{camp_id}/remove-employee", headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "El campamento no tiene un empleado asignado"

    @pytest.mark.parametrize(
        "role, status",
        [
            (UserRole.CLIENT, UserStatus.ACTIVE),
            (UserRole.ADMIN, UserStatus.ACTIVE),
            (UserRole.EMPLOYEE, UserStatus.INACTIVE),
        ],
    )
    def test_assign_requires_active_employee(
        self, client, admin_headers, make_user, role, status
    ):
        candidate = make_user(role=role, status=status)
        camp_id = client.post(
            "/api/camps", headers=admin_headers, json={"name": "Campamento Este"}
        ).json()["data"]["id"]

        response = client.post(
            f"/api/camps/{camp_id}/assign-employee",
            headers=admin_headers,
            json={"employee_id": str(candidate.id)},
        )

        assert response.status_code == 404

    def test_delete_is_hard(self, client, admin_headers):
        camp_id = client.post(
            "/api/camps", headers=admin_headers, json={"name": "Campamento Oeste"}
        ).json()["data"]["id"]

        assert client.delete(f"/api/camps/{camp_id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/camps/{camp_id}", headers=admin_headers).status_code == 404

        recreated = client.post(
            "/api/camps", headers=admin_headers, json={"name": "Campamento Oeste"}
        )
        assert recreated.status_code == 201

    def test_statistics(self, client, admin_headers, employee):
        client.post(
            "/api/camps",
            headers=admin_headers,
            json={"name": "Con empleado", "employee_id": str(employee.id)},
        )
        client.post(
            "/api/camps",
            headers=admin_headers,
            json={"name": "Sin empleado", "status": "inactive"},
        )

        data = client.get(
            "/api/camps/statistics/general", headers=admin_headers
        ).json()["data"]

        assert data == {
            "total_camps": 2,
            "active": 1,
            "inactive": 1,
            "with_employee": 1,
            "without_employee": 1,
        }
