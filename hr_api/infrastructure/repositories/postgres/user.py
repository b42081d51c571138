"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios (por id / por email) para auth y administración.
  - Crear y guardar usuarios (fila completa).
  - Listar con filtros (status, role, position, búsqueda) paginado.
  - Mapear filas crudas -> entidad de dominio `User` validando enums.

Collaborators:
  - postgres.base.PostgresRepository (ejecución + errores)
  - identity.users.User / UserRole / UserStatus

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso.
  - Email duplicado -> ConstraintViolationError (uq_users_email).
  - Usuario vivo con position_id: FOR SHARE sobre el cargo vivo en la misma
    transacción (un cargo borrado cuenta como FK inexistente).
  - Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional, Sequence
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.pagination import Page, PageRequest
from ....domain.repositories import UserFilter, UserRepository
from ....identity.users import LIVE_USER_STATUSES, User, UserRole, UserStatus
from .base import PostgresRepository, like_pattern, lock_live_row

# R: Lista explícita de columnas (contrato con migraciones).
_USER_COLUMNS = (
    "id, name, email, password_hash, role, status, position_id, "
    "created_at, updated_at"
)
_USER_ORDER_BY = "created_at DESC, id DESC"
_FK_POSITION = "fk_users_position_id__positions"


def _lock_position(conn, user: User) -> None:
    """R: Un usuario vivo sólo puede apuntar a un cargo vivo (FOR SHARE)."""
    if user.position_id is None or user.status not in LIVE_USER_STATUSES:
        return
    lock_live_row(conn, "positions", user.position_id, constraint=_FK_POSITION)


def _row_to_user(row: tuple) -> User:
    """Convierte una fila de `users` a `User` (enums estrictos)."""
    try:
        role = UserRole(row[4])
        status = UserStatus(row[5])
    except ValueError as exc:
        raise DatabaseError(
            f"Invalid user role/status in database: {row[4]}/{row[5]}"
        ) from exc

    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        role=role,
        status=status,
        position_id=row[6],
        created_at=row[7],
        updated_at=row[8],
    )


class PostgresUserRepository(PostgresRepository, UserRepository):
    _LOG_PREFIX = "PostgresUserRepository"

    def get_user(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            "get_user",
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            [user_id],
            {"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            "get_user_by_email",
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            [email],
        )
        return _row_to_user(row) if row else None

    def create_user(self, user: User) -> User:
        def _insert(conn) -> Optional[tuple]:
            _lock_position(conn, user)
            return conn.execute(
                f"""
                INSERT INTO users
                    (id, name, email, password_hash, role, status, position_id)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
                """,
                (
                    user.id,
                    user.name,
                    user.email,
                    user.password_hash,
                    user.role.value,
                    user.status.value,
                    user.position_id,
                ),
            ).fetchone()

        row = self._run("create_user", _insert)
        if row is None:
            raise DatabaseError("Failed to create user: no row returned")
        return _row_to_user(row)

    def update_user(self, user: User) -> Optional[User]:
        def _update(conn) -> Optional[tuple]:
            _lock_position(conn, user)
            return conn.execute(
                f"""
                UPDATE users
                SET name = %s, email = %s, password_hash = %s, role = %s,
                    status = %s, position_id = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
                """,
                (
                    user.name,
                    user.email,
                    user.password_hash,
                    user.role.value,
                    user.status.value,
                    user.position_id,
                    user.id,
                ),
            ).fetchone()

        row = self._run("update_user", _update, {"user_id": str(user.id)})
        return _row_to_user(row) if row else None

    def list_users(self, filters: UserFilter, page: PageRequest) -> Page[User]:
        clauses: List[str] = ["status = ANY(%s)"]
        params: List[object] = [[s.value for s in filters.statuses]]

        if filters.role is not None:
            clauses.append("role = %s")
            params.append(filters.role.value)
        if filters.position_id is not None:
            clauses.append("position_id = %s")
            params.append(filters.position_id)
        if filters.search:
            clauses.append("(name ILIKE %s OR email ILIKE %s)")
            pattern = like_pattern(filters.search)
            params.extend([pattern, pattern])

        where = " AND ".join(clauses)
        return self._paginate(
            "list_users",
            select_sql=(
                f"SELECT {_USER_COLUMNS} FROM users WHERE {where} "
                f"ORDER BY {_USER_ORDER_BY}"
            ),
            count_sql=f"SELECT COUNT(*) FROM users WHERE {where}",
            params=params,
            page=page,
            mapper=_row_to_user,
        )

    def count_users_by_position(
        self, position_id: UUID, statuses: Sequence[UserStatus]
    ) -> int:
        row = self._fetchone(
            "count_users_by_position",
            "SELECT COUNT(*) FROM users WHERE position_id = %s AND status = ANY(%s)",
            [position_id, [s.value for s in statuses]],
        )
        return int(row[0]) if row else 0

    def ping(self) -> bool:
        row = self._fetchone("ping", "SELECT 1")
        return bool(row and row[0] == 1)
