"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/attendance.py
============================================================
Class: InMemoryAttendanceRepository

Responsibilities:
  - Implement AttendanceRepository over InMemoryStore.
  - Emulate the partial unique index (employee_id, date) for live records:
    the insert/update is checked and applied under the store lock, so two
    concurrent creates for the same day cannot both succeed.
  - Exit and delete are check-and-set under the lock (exit written once,
    a deleted record is never saved back as live).
  - Join the employee summary on every read.
  - Ordering aligned with Postgres:
      default:   date DESC, entry_time DESC NULLS LAST
      by date:   employee name ASC

Collaborators:
  - in_memory.store.InMemoryStore
  - domain.repositories.AttendanceRepository / AttendanceFilter
============================================================
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, time
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import (
    LIVE_RECORD_STATUSES,
    Attendance,
    AttendanceStatus,
    AttendanceStatusCounts,
    DailyAttendanceStatistics,
)
from ....domain.repositories import AttendanceFilter, AttendanceRepository
from .store import InMemoryStore, clone, contains, utcnow


def count_statuses(records: Iterable[Attendance]) -> AttendanceStatusCounts:
    counts: Dict[AttendanceStatus, int] = defaultdict(int)
    total = 0
    for record in records:
        counts[record.status] += 1
        total += 1
    return AttendanceStatusCounts(
        total=total,
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        justified=counts[AttendanceStatus.JUSTIFIED],
    )


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    # =========================================================
    # Helpers internos
    # =========================================================
    def _hydrate(self, record: Attendance) -> Attendance:
        """R: Copia + join del empleado (lock ya tomado)."""
        out = clone(record)
        out.employee = self._store.employee_summary(record.employee_id)
        return out

    def _live_record(self, attendance_id: UUID) -> Optional[Attendance]:
        record = self._store.attendances.get(attendance_id)
        if record is None or record.record_status not in LIVE_RECORD_STATUSES:
            return None
        return record

    def _live(self) -> List[Attendance]:
        return [
            r
            for r in self._store.attendances.values()
            if r.record_status in LIVE_RECORD_STATUSES
        ]

    # =========================================================
    # Escrituras
    # =========================================================
    def create_attendance(self, attendance: Attendance) -> Attendance:
        now = utcnow()
        record = clone(attendance)
        record.employee = None
        record.created_at = record.created_at or now
        record.updated_at = record.updated_at or now
        with self._store.lock:
            self._store.check_attendance(record)
            self._store.attendances[record.id] = record
            return self._hydrate(record)

    def update_attendance(
        self, attendance: Attendance, *, protect_exit: bool = False
    ) -> Optional[Attendance]:
        record = clone(attendance)
        record.employee = None
        record.updated_at = utcnow()
        with self._store.lock:
            stored = self._live_record(record.id)
            if stored is None:
                return None
            if protect_exit and stored.exit_time not in (None, record.exit_time):
                return None
            if record.exit_time is None:
                record.exit_time = stored.exit_time
            self._store.check_attendance(record)
            self._store.attendances[record.id] = record
            return self._hydrate(record)

    def set_exit_time(self, attendance_id: UUID, exit_time: time) -> Optional[Attendance]:
        with self._store.lock:
            stored = self._live_record(attendance_id)
            if stored is None or stored.exit_time is not None:
                return None
            record = clone(stored)
            record.exit_time = exit_time
            record.updated_at = utcnow()
            self._store.attendances[record.id] = record
            return self._hydrate(record)

    def soft_delete_attendance(self, attendance_id: UUID) -> Optional[Attendance]:
        with self._store.lock:
            stored = self._live_record(attendance_id)
            if stored is None:
                return None
            record = clone(stored)
            record.mark_deleted()
            self._store.attendances[record.id] = record
            return self._hydrate(record)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_attendance(
        self, attendance_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Attendance]:
        with self._store.lock:
            record = self._store.attendances.get(attendance_id)
            if record is None:
                return None
            if record.is_deleted and not include_deleted:
                return None
            return self._hydrate(record)

    def exists_live_for_day(
        self, employee_id: UUID, day: date, *, exclude_id: UUID | None = None
    ) -> bool:
        with self._store.lock:
            return any(
                r.employee_id == employee_id and r.date == day and r.id != exclude_id
                for r in self._live()
            )

    def list_attendances(
        self, filters: AttendanceFilter, page: PageRequest
    ) -> Page[Attendance]:
        with self._store.lock:
            rows = [self._hydrate(r) for r in self._live()]

        def predicate(r: Attendance) -> bool:
            if filters.employee_id is not None and r.employee_id != filters.employee_id:
                return False
            if filters.on_date is not None and r.date != filters.on_date:
                return False
            if filters.start_date is not None and r.date < filters.start_date:
                return False
            if filters.end_date is not None and r.date > filters.end_date:
                return False
            if filters.status is not None and r.status != filters.status:
                return False
            if filters.employee_name and not contains(
                r.employee.name if r.employee else None, filters.employee_name
            ):
                return False
            return True

        rows = [r for r in rows if predicate(r)]

        if filters.order_by_employee_name:
            rows.sort(key=lambda r: ((r.employee.name if r.employee else ""), str(r.id)))
        else:
            # R: entry_time DESC NULLS LAST dentro de cada fecha.
            rows.sort(
                key=lambda r: (
                    r.date,
                    r.entry_time is not None,
                    r.entry_time or time.min,
                ),
                reverse=True,
            )
        return Page.from_slice(rows, page)

    def count_by_status(
        self, *, employee_id: UUID | None = None
    ) -> AttendanceStatusCounts:
        with self._store.lock:
            rows = [
                r
                for r in self._live()
                if employee_id is None or r.employee_id == employee_id
            ]
        return count_statuses(rows)

    def daily_statistics(
        self, start_date: date, end_date: date
    ) -> List[DailyAttendanceStatistics]:
        by_day: Dict[date, List[Attendance]] = defaultdict(list)
        with self._store.lock:
            for r in self._live():
                if start_date <= r.date <= end_date:
                    by_day[r.date].append(r)
        return [
            DailyAttendanceStatistics(date=day, counts=count_statuses(records))
            for day, records in sorted(by_day.items(), reverse=True)
        ]
