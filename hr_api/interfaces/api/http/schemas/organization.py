"""
===============================================================================
TARJETA CRC — schemas/organization.py
===============================================================================

Módulo:
    Schemas HTTP para departamentos, cargos y camps

Responsabilidades:
    - Requests de create/update (nombres 2..100 con trim, descripciones ≤ 500).
    - Responses que exponen status operativo y tombstone (deleted_at) por
      separado.
    - DTOs de estadísticas.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.entities import (
    Camp,
    CampStatistics,
    Department,
    DepartmentStatistics,
    OperationalStatus,
    Position,
    PositionStatistics,
)
from .common import DescriptionField, EmployeeSummaryRes, NameField

# =============================================================================
# Departments
# =============================================================================


class CreateDepartmentReq(BaseModel):
    name: NameField
    description: DescriptionField | None = None
    status: OperationalStatus = OperationalStatus.ACTIVE


class UpdateDepartmentReq(BaseModel):
    name: NameField | None = None
    description: DescriptionField | None = None
    status: OperationalStatus | None = None


class DepartmentRes(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    status: OperationalStatus
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, department: Department) -> "DepartmentRes":
        return cls(
            id=department.id,
            name=department.name,
            description=department.description,
            status=department.status,
            is_deleted=department.is_deleted,
            deleted_at=department.deleted_at,
            created_at=department.created_at,
            updated_at=department.updated_at,
        )


class DepartmentPositionCountRes(BaseModel):
    id: UUID
    name: str
    position_count: int


class DepartmentStatsRes(BaseModel):
    total: int
    active: int
    inactive: int
    deleted: int
    positions_per_department: List[DepartmentPositionCountRes]

    @classmethod
    def from_stats(cls, stats: DepartmentStatistics) -> "DepartmentStatsRes":
        return cls(
            total=stats.total,
            active=stats.active,
            inactive=stats.inactive,
            deleted=stats.deleted,
            positions_per_department=[
                DepartmentPositionCountRes(
                    id=item.id, name=item.name, position_count=item.position_count
                )
                for item in stats.positions_per_department
            ],
        )


# =============================================================================
# Positions
# =============================================================================


class CreatePositionReq(BaseModel):
    name: NameField
    department_id: UUID
    description: DescriptionField | None = None
    base_salary: Decimal = Field(
        default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2
    )
    status: OperationalStatus = OperationalStatus.ACTIVE


class UpdatePositionReq(BaseModel):
    name: NameField | None = None
    department_id: UUID | None = None
    description: DescriptionField | None = None
    base_salary: Decimal | None = Field(
        default=None, ge=0, max_digits=10, decimal_places=2
    )
    status: OperationalStatus | None = None


class DepartmentSummaryRes(BaseModel):
    id: UUID
    name: str


class PositionRes(BaseModel):
    id: UUID
    name: str
    department_id: UUID
    description: str | None = None
    base_salary: Decimal
    status: OperationalStatus
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    department: DepartmentSummaryRes | None = None

    @classmethod
    def from_entity(cls, position: Position) -> "PositionRes":
        department = None
        if position.department is not None:
            department = DepartmentSummaryRes(
                id=position.department.id, name=position.department.name
            )
        return cls(
            id=position.id,
            name=position.name,
            department_id=position.department_id,
            description=position.description,
            base_salary=position.base_salary,
            status=position.status,
            is_deleted=position.is_deleted,
            deleted_at=position.deleted_at,
            created_at=position.created_at,
            updated_at=position.updated_at,
            department=department,
        )


class PositionStatsRes(BaseModel):
    total: int
    active: int
    inactive: int
    deleted: int

    @classmethod
    def from_stats(cls, stats: PositionStatistics) -> "PositionStatsRes":
        return cls(
            total=stats.total,
            active=stats.active,
            inactive=stats.inactive,
            deleted=stats.deleted,
        )


# =============================================================================
# Camps
# =============================================================================


class CreateCampReq(BaseModel):
    name: NameField
    employee_id: UUID | None = None
    description: DescriptionField | None = None
    status: OperationalStatus = OperationalStatus.ACTIVE


class UpdateCampReq(BaseModel):
    name: NameField | None = None
    employee_id: UUID | None = None
    description: DescriptionField | None = None
    status: OperationalStatus | None = None


class AssignEmployeeReq(BaseModel):
    employee_id: UUID


class CampRes(BaseModel):
    id: UUID
    name: str
    employee_id: UUID | None = None
    description: str | None = None
    status: OperationalStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    employee: EmployeeSummaryRes | None = None

    @classmethod
    def from_entity(cls, camp: Camp) -> "CampRes":
        return cls(
            id=camp.id,
            name=camp.name,
            employee_id=camp.employee_id,
            description=camp.description,
            status=camp.status,
            created_at=camp.created_at,
            updated_at=camp.updated_at,
            employee=EmployeeSummaryRes.from_summary(camp.employee),
        )


class CampStatsRes(BaseModel):
    total_camps: int
    active: int
    inactive: int
    with_employee: int
    without_employee: int

    @classmethod
    def from_stats(cls, stats: CampStatistics) -> "CampStatsRes":
        return cls(
            total_camps=stats.total,
            active=stats.active,
            inactive=stats.inactive,
            with_employee=stats.with_employee,
            without_employee=stats.without_employee,
        )
