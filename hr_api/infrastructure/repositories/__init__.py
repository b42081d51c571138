"""
Repository implementations.

- postgres/: production adapters (psycopg + pool).
- in_memory/: test adapters sharing one InMemoryStore.
"""

from .in_memory import (
    InMemoryAttendanceRepository,
    InMemoryCampRepository,
    InMemoryDepartmentRepository,
    InMemoryPositionRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresAttendanceRepository,
    PostgresCampRepository,
    PostgresDepartmentRepository,
    PostgresPositionRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryAttendanceRepository",
    "InMemoryDepartmentRepository",
    "InMemoryPositionRepository",
    "InMemoryCampRepository",
    "PostgresUserRepository",
    "PostgresAttendanceRepository",
    "PostgresDepartmentRepository",
    "PostgresPositionRepository",
    "PostgresCampRepository",
]
