"""
Name: Attendance API Tests

Responsibilities:
  - Entry / exit flow with derived worked hours
  - Staff-only writes (clients are rejected)
  - Duplicate day and format validation map to 400
  - Listing order and date filters
"""

from uuid import uuid4

import pytest

from hr_api.identity.users import UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def staff_headers(employee, auth_headers):
    return auth_headers(employee)


def _entry(client, headers, employee_id, day="2024-03-11", entry_time="08:00"):
    return client.post(
        "/api/attendances/entry",
        headers=headers,
        json={"employee_id": str(employee_id), "date": day, "entry_time": entry_time},
    )


class TestEntryExit:
    def test_entry_then_exit_reports_worked_hours(self, client, employee, staff_headers):
        entry = _entry(client, staff_headers, employee.id)
        assert entry.status_code == 201
        record = entry.json()["data"]
        assert record["status"] == "present"
        assert record["exit_time"] is None
        assert record["worked_hours"] is None
        assert record["employee"]["email"] == "ana@example.com"

        exit_ = client.post(
            f"/api/attendances/{record['id']}/exit",
            headers=staff_headers,
            json={"exit_time": "16:30"},
        )

        assert exit_.status_code == 200
        assert exit_.json()["message"] == "Salida registrada exitosamente"
        assert exit_.json()["data"]["worked_hours"] == {
            "hours": 8,
            "minutes": 30,
            "total_minutes": 510,
            "total_hours": "8.50",
        }

    def test_second_exit_is_400(self, client, employee, staff_headers):
        record_id = _entry(client, staff_headers, employee.id).json()["data"]["id"]
        url = f"/api/attendances/{record_id}/exit"

        assert client.post(url, headers=staff_headers, json={"exit_time": "17:00"}).status_code == 200
        second = client.post(url, headers=staff_headers, json={"exit_time": "18:00"})

        assert second.status_code == 400

    def test_duplicate_entry_is_400(self, client, employee, staff_headers):
        assert _entry(client, staff_headers, employee.id).status_code == 201

        response = _entry(client, staff_headers, employee.id, entry_time="09:00")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unknown_employee_is_404(self, client, staff_headers):
        response = _entry(client, staff_headers, uuid4())

        assert response.status_code == 404
        assert response.json()["message"] == "Empleado no encontrado"

    @pytest.mark.parametrize(
        "day, entry_time, path",
        [("11/03/2024", "08:00", "date"), ("2024-03-11", "8am", "entry_time")],
    )
    def test_bad_formats_are_400(
        self, client, employee, staff_headers, day, entry_time, path
    ):
        response = _entry(client, staff_headers, employee.id, day=day, entry_time=entry_time)

        assert response.status_code == 400
        assert path in {error["path"] for error in response.json()["errors"]}

    def test_client_role_cannot_write(self, client, employee, make_user, auth_headers):
        outsider = make_user(role=UserRole.CLIENT)

        response = _entry(client, auth_headers(outsider), employee.id)

        assert response.status_code == 403

    def test_client_role_can_read(self, client, make_user, auth_headers):
        outsider = make_user(role=UserRole.CLIENT)

        response = client.get("/api/attendances", headers=auth_headers(outsider))

        assert response.status_code == 200


class TestUpdateDelete:
    def test_delete_then_recreate_same_day(self, client, employee, staff_headers):
        record_id = _entry(client, staff_headers, employee.id).json()["data"]["id"]

        deleted = client.delete(f"/api/attendances/{record_id}", headers=staff_headers)
        assert deleted.status_code == 200
        assert client.get(f"/api/attendances/{record_id}", headers=staff_headers).status_code == 404

        assert _entry(client, staff_headers, employee.id).status_code == 201

    def test_exit_on_deleted_record_is_404(self, client, employee, staff_headers):
        record_id = _entry(client, staff_headers, employee.id).json()["data"]["id"]
        assert client.delete(
            f"/api/attendances/{record_id}", headers=staff_headers
        ).status_code == 200

        response = client.post(
            f"/api/attendances/{record_id}/exit",
            headers=staff_headers,
            json={"exit_time": "17:00"},
        )

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_update_rejects_deleted_record_status(self, client, employee, staff_headers):
        record_id = _entry(client, staff_headers, employee.id).json()["data"]["id"]

        response = client.put(
            f"/api/attendances/{record_id}",
            headers=staff_headers,
            json={"record_status": "deleted"},
        )

        assert response.status_code == 400

    def test_update_observations(self, client, employee, staff_headers):
        record_id = _entry(client, staff_headers, employee.id).json()["data"]["id"]

        response = client.put(
            f"/api/attendances/{record_id}",
            headers=staff_headers,
            json={"observations": "Llegó con permiso", "status": "justified"},
        )

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["observations"] == "Llegó con permiso"
        assert data["status"] == "justified"
        assert data["entry_time"] == "08:00:00"


class TestQueries:
    def test_list_orders_by_date_desc(self, client, employee, staff_headers):
        _entry(client, staff_headers, employee.id, day="2024-03-10")
        _entry(client, staff_headers, employee.id, day="2024-03-12")
        _entry(client, staff_headers, employee.id, day="2024-03-11")

        data = client.get("/api/attendances", headers=staff_headers).json()["data"]

        assert [r["date"] for r in data] == ["2024-03-12", "2024-03-11", "2024-03-10"]

    def test_by_date_orders_by_employee_name(
        self, client, employee, make_user, staff_headers
    ):
        bruno = make_user(name="Bruno Díaz")
        _entry(client, staff_headers, bruno.id)
        _entry(client, staff_headers, employee.id)

        data = client.get(
            "/api/attendances/date/2024-03-11", headers=staff_headers
        ).json()["data"]

        assert [r["employee"]["name"] for r in data] == ["Ana Pérez", "Bruno Díaz"]

    def test_date_range_inclusive(self, client, employee, staff_headers):
        for day in ("2024-03-09", "2024-03-10", "2024-03-11", "2024-03-12"):
            _entry(client, staff_headers, employee.id, day=day)

        response = client.get(
            "/api/attendances/date-range?start_date=2024-03-10&end_date=2024-03-11",
            headers=staff_headers,
        )

        assert sorted(r["date"] for r in response.json()["data"]) == [
            "2024-03-10",
            "2024-03-11",
        ]

    def test_date_range_requires_both_bounds(self, client, staff_headers):
        response = client.get(
            "/api/attendances/date-range?start_date=2024-03-10", headers=staff_headers
        )

        assert response.status_code == 400

    def test_search_by_employee_name(self, client, employee, make_user, staff_headers):
        other = make_user(name="Pedro Ruiz")
        _entry(client, staff_headers, employee.id)
        _entry(client, staff_headers, other.id)

        data = client.get(
            "/api/attendances/search?q=pérez", headers=staff_headers
        ).json()["data"]

        assert [r["employee_id"] for r in data] == [str(employee.id)]

    def test_employee_statistics(self, client, employee, staff_headers):
        _entry(client, staff_headers, employee.id, day="2024-03-11")
        client.post(
            "/api/attendances",
            headers=staff_headers,
            json={"employee_id": str(employee.id), "date": "2024-03-12", "status": "absent"},
        )

        data = client.get(
            f"/api/attendances/statistics/employee/{employee.id}",
            headers=staff_headers,
        ).json()["data"]

        assert data["total_days"] == 2
        assert data["days_present"] == 1
        assert data["days_absent"] == 1
        assert data["attendance_percentage"] == "50.00"

    def test_general_statistics(self, client, employee, staff_headers):
        _entry(client, staff_headers, employee.id)

        data = client.get(
            "/api/attendances/statistics/general", headers=staff_headers
        ).json()["data"]

        assert data["total_records"] == 1
        assert data["present"] == 1
