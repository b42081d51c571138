from .department_queries import (
    GetDepartmentStatisticsUseCase,
    GetDepartmentUseCase,
    ListDepartmentPositionsUseCase,
    ListDepartmentsUseCase,
)
from .manage_departments import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    DeleteDepartmentUseCase,
    UpdateDepartmentInput,
    UpdateDepartmentUseCase,
)

__all__ = [
    "CreateDepartmentInput",
    "CreateDepartmentUseCase",
    "UpdateDepartmentInput",
    "UpdateDepartmentUseCase",
    "DeleteDepartmentUseCase",
    "GetDepartmentUseCase",
    "ListDepartmentsUseCase",
    "ListDepartmentPositionsUseCase",
    "GetDepartmentStatisticsUseCase",
]
