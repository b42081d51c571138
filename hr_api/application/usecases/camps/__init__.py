from .camp_queries import GetCampStatisticsUseCase, GetCampUseCase, ListCampsUseCase
from .manage_camps import (
    AssignCampEmployeeUseCase,
    CreateCampInput,
    CreateCampUseCase,
    DeleteCampUseCase,
    RemoveCampEmployeeUseCase,
    UpdateCampInput,
    UpdateCampUseCase,
)

__all__ = [
    "CreateCampInput",
    "CreateCampUseCase",
    "UpdateCampInput",
    "UpdateCampUseCase",
    "DeleteCampUseCase",
    "AssignCampEmployeeUseCase",
    "RemoveCampEmployeeUseCase",
    "GetCampUseCase",
    "ListCampsUseCase",
    "GetCampStatisticsUseCase",
]
