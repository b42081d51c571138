"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/attendance.py
============================================================
Class: PostgresAttendanceRepository

Responsibilities:
  - Persistir asistencias (insert, guardado condicional sobre registros
    vivos, salida check-and-set, borrado lógico).
  - Leer asistencias con JOIN a users (resumen del empleado).
  - Filtros: empleado, fecha exacta, rango, status, nombre de empleado.
  - Agregados por status (FILTER) globales, por empleado y por día.

Collaborators:
  - postgres.base.PostgresRepository
  - domain.entities.Attendance / AttendanceStatusCounts

Constraints / Notes:
  - Unicidad (employee_id, date) la garantiza el índice parcial
    uq_attendances_employee_date_live (record_status IN active/inactive).
    Una carrera entre dos creates termina en ConstraintViolationError.
  - Los registros "deleted" nunca aparecen en listados ni agregados.
============================================================
"""

from __future__ import annotations

from datetime import date, time
from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import (
    LIVE_RECORD_STATUSES,
    Attendance,
    AttendanceStatus,
    AttendanceStatusCounts,
    DailyAttendanceStatistics,
    EmployeeSummary,
    RecordStatus,
)
from ....domain.repositories import AttendanceFilter, AttendanceRepository
from ....identity.users import UserRole
from .base import PostgresRepository, like_pattern

_ATTENDANCE_COLUMNS = (
    "a.id, a.employee_id, a.date, a.entry_time, a.exit_time, a.status, "
    "a.observations, a.record_status, a.created_at, a.updated_at, "
    "u.name, u.email, u.role"
)
_FROM = "FROM attendances a JOIN users u ON u.id = a.employee_id"
_ORDER_DEFAULT = "a.date DESC, a.entry_time DESC NULLS LAST, a.id DESC"
_ORDER_BY_EMPLOYEE = "u.name ASC, a.id ASC"

_LIVE = [s.value for s in LIVE_RECORD_STATUSES]

# R: Agregado por status reutilizable (COUNT FILTER).
_COUNTS_SQL = """
    COUNT(*),
    COUNT(*) FILTER (WHERE a.status = 'present'),
    COUNT(*) FILTER (WHERE a.status = 'absent'),
    COUNT(*) FILTER (WHERE a.status = 'late'),
    COUNT(*) FILTER (WHERE a.status = 'justified')
"""


def _counts(row: Optional[tuple], offset: int = 0) -> AttendanceStatusCounts:
    if not row:
        return AttendanceStatusCounts()
    values = [int(v or 0) for v in row[offset : offset + 5]]
    return AttendanceStatusCounts(
        total=values[0],
        present=values[1],
        absent=values[2],
        late=values[3],
        justified=values[4],
    )


def _row_to_attendance(row: tuple) -> Attendance:
    try:
        status = AttendanceStatus(row[5])
        record_status = RecordStatus(row[7])
    except ValueError as exc:
        raise DatabaseError(
            f"Invalid attendance status in database: {row[5]}/{row[7]}"
        ) from exc

    return Attendance(
        id=row[0],
        employee_id=row[1],
        date=row[2],
        entry_time=row[3],
        exit_time=row[4],
        status=status,
        observations=row[6],
        record_status=record_status,
        created_at=row[8],
        updated_at=row[9],
        employee=EmployeeSummary(
            id=row[1], name=row[10], email=row[11], role=UserRole(row[12])
        ),
    )


class PostgresAttendanceRepository(PostgresRepository, AttendanceRepository):
    _LOG_PREFIX = "PostgresAttendanceRepository"

    # =========================================================
    # Escrituras
    # =========================================================
    def create_attendance(self, attendance: Attendance) -> Attendance:
        row = self._fetchone(
            "create_attendance",
            """
            INSERT INTO attendances
                (id, employee_id, date, entry_time, exit_time, status,
                 observations, record_status)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            [
                attendance.id,
                attendance.employee_id,
                attendance.date,
                attendance.entry_time,
                attendance.exit_time,
                attendance.status.value,
                attendance.observations,
                attendance.record_status.value,
            ],
            {"employee_id": str(attendance.employee_id)},
        )
        if row is None:
            raise DatabaseError("Failed to create attendance: no row returned")
        created = self.get_attendance(attendance.id, include_deleted=True)
        if created is None:
            raise DatabaseError("Failed to reload attendance after insert")
        return created

    def update_attendance(
        self, attendance: Attendance, *, protect_exit: bool = False
    ) -> Optional[Attendance]:
        query = """
            UPDATE attendances
            SET employee_id = %s, date = %s, entry_time = %s,
                exit_time = COALESCE(%s, exit_time),
                status = %s, observations = %s, record_status = %s,
                updated_at = NOW()
            WHERE id = %s AND record_status = ANY(%s)
            """
        params: List[object] = [
            attendance.employee_id,
            attendance.date,
            attendance.entry_time,
            attendance.exit_time,
            attendance.status.value,
            attendance.observations,
            attendance.record_status.value,
            attendance.id,
            _LIVE,
        ]
        if protect_exit:
            query += " AND (exit_time IS NULL OR exit_time = %s)"
            params.append(attendance.exit_time)
        row = self._fetchone(
            "update_attendance",
            query + " RETURNING id",
            params,
            {"attendance_id": str(attendance.id)},
        )
        if row is None:
            return None
        return self.get_attendance(attendance.id, include_deleted=True)

    def set_exit_time(self, attendance_id: UUID, exit_time: time) -> Optional[Attendance]:
        # R: Check-and-set en un solo statement; la salida se escribe una vez.
        row = self._fetchone(
            "set_exit_time",
            """
            UPDATE attendances
            SET exit_time = %s, updated_at = NOW()
            WHERE id = %s AND exit_time IS NULL AND record_status = ANY(%s)
            RETURNING id
            """,
            [exit_time, attendance_id, _LIVE],
            {"attendance_id": str(attendance_id)},
        )
        if row is None:
            return None
        return self.get_attendance(attendance_id, include_deleted=True)

    def soft_delete_attendance(self, attendance_id: UUID) -> Optional[Attendance]:
        row = self._fetchone(
            "soft_delete_attendance",
            """
            UPDATE attendances
            SET record_status = %s, updated_at = NOW()
            WHERE id = %s AND record_status = ANY(%s)
            RETURNING id
            """,
            [RecordStatus.DELETED.value, attendance_id, _LIVE],
            {"attendance_id": str(attendance_id)},
        )
        if row is None:
            return None
        return self.get_attendance(attendance_id, include_deleted=True)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_attendance(
        self, attendance_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Attendance]:
        query = f"SELECT {_ATTENDANCE_COLUMNS} {_FROM} WHERE a.id = %s"
        params: List[object] = [attendance_id]
        if not include_deleted:
            query += " AND a.record_status = ANY(%s)"
            params.append(_LIVE)
        row = self._fetchone("get_attendance", query, params)
        return _row_to_attendance(row) if row else None

    def exists_live_for_day(
        self, employee_id: UUID, day: date, *, exclude_id: UUID | None = None
    ) -> bool:
        query = (
            "SELECT 1 FROM attendances a "
            "WHERE a.employee_id = %s AND a.date = %s AND a.record_status = ANY(%s)"
        )
        params: List[object] = [employee_id, day, _LIVE]
        if exclude_id is not None:
            query += " AND a.id <> %s"
            params.append(exclude_id)
        return self._fetchone("exists_live_for_day", query + " LIMIT 1", params) is not None

    def list_attendances(
        self, filters: AttendanceFilter, page: PageRequest
    ) -> Page[Attendance]:
        clauses: List[str] = ["a.record_status = ANY(%s)"]
        params: List[object] = [_LIVE]

        if filters.employee_id is not None:
            clauses.append("a.employee_id = %s")
            params.append(filters.employee_id)
        if filters.on_date is not None:
            clauses.append("a.date = %s")
            params.append(filters.on_date)
        if filters.start_date is not None:
            clauses.append("a.date >= %s")
            params.append(filters.start_date)
        if filters.end_date is not None:
            clauses.append("a.date <= %s")
            params.append(filters.end_date)
        if filters.status is not None:
            clauses.append("a.status = %s")
            params.append(filters.status.value)
        if filters.employee_name:
            clauses.append("u.name ILIKE %s")
            params.append(like_pattern(filters.employee_name))

        where = " AND ".join(clauses)
        order = _ORDER_BY_EMPLOYEE if filters.order_by_employee_name else _ORDER_DEFAULT
        return self._paginate(
            "list_attendances",
            select_sql=f"SELECT {_ATTENDANCE_COLUMNS} {_FROM} WHERE {where} ORDER BY {order}",
            count_sql=f"SELECT COUNT(*) {_FROM} WHERE {where}",
            params=params,
            page=page,
            mapper=_row_to_attendance,
        )

    # =========================================================
    # Agregados
    # =========================================================
    def count_by_status(
        self, *, employee_id: UUID | None = None
    ) -> AttendanceStatusCounts:
        query = f"SELECT {_COUNTS_SQL} FROM attendances a WHERE a.record_status = ANY(%s)"
        params: List[object] = [_LIVE]
        if employee_id is not None:
            query += " AND a.employee_id = %s"
            params.append(employee_id)
        return _counts(self._fetchone("count_by_status", query, params))

    def daily_statistics(
        self, start_date: date, end_date: date
    ) -> List[DailyAttendanceStatistics]:
        rows = self._fetchall(
            "daily_statistics",
            f"""
            SELECT a.date, {_COUNTS_SQL}
            FROM attendances a
            WHERE a.record_status = ANY(%s) AND a.date BETWEEN %s AND %s
            GROUP BY a.date
            ORDER BY a.date DESC
            """,
            [_LIVE, start_date, end_date],
        )
        return [
            DailyAttendanceStatistics(date=row[0], counts=_counts(row, offset=1))
            for row in rows
        ]
