from .manage_positions import (
    CreatePositionInput,
    CreatePositionUseCase,
    DeletePositionUseCase,
    UpdatePositionInput,
    UpdatePositionUseCase,
)
from .position_queries import (
    GetPositionStatisticsUseCase,
    GetPositionUseCase,
    ListPositionEmployeesUseCase,
    ListPositionsUseCase,
)

__all__ = [
    "CreatePositionInput",
    "CreatePositionUseCase",
    "UpdatePositionInput",
    "UpdatePositionUseCase",
    "DeletePositionUseCase",
    "GetPositionUseCase",
    "ListPositionsUseCase",
    "ListPositionEmployeesUseCase",
    "GetPositionStatisticsUseCase",
]
