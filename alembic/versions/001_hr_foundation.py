"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_hr_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo desde cero (migración fundacional).
  - Definir tablas, constraints e índices que respaldan las reglas de
    unicidad y referencia de los casos de uso.

Collaborators:
  - PostgreSQL 16+
  - Alembic (framework de migraciones)
  - Repositorios Postgres (traducen violaciones por nombre de constraint)

Policy:
  - Esta es una migración BASELINE. Downgrade NO soportado.
  - Toda evolución futura del esquema debe hacerse con migraciones aditivas (002+).
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
      ck_<tabla>_<col>                   - Check constraints
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_hr_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """
    Crea el esquema fundacional completo.

    Orden por dependencias de FK:
      1) Departments
      2) Positions (-> departments)
      3) Users (-> positions)
      4) Camps (-> users)
      5) Attendances (-> users)
    """

    # =========================================================
    # 1) DEPARTMENTS
    # =========================================================
    op.create_table(
        "departments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        *_timestamps(),
        # deleted_at = tombstone (independiente del status operativo)
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_departments"),
        # Unicidad sobre TODAS las filas (incluye borradas)
        sa.UniqueConstraint("name", name="uq_departments_name"),
        sa.CheckConstraint(
            "status IN ('active','inactive')", name="ck_departments_status"
        ),
    )
    op.create_index("ix_departments_deleted_at", "departments", ["deleted_at"])

    # =========================================================
    # 2) POSITIONS
    # =========================================================
    op.create_table(
        "positions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("department_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "base_salary",
            sa.Numeric(10, 2),
            nullable=False,
            server_default=sa.text("0.00"),
        ),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_positions"),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="fk_positions_department_id__departments",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "status IN ('active','inactive')", name="ck_positions_status"
        ),
        sa.CheckConstraint("base_salary >= 0", name="ck_positions_base_salary"),
    )
    op.create_index("ix_positions_department_id", "positions", ["department_id"])
    op.create_index("ix_positions_deleted_at", "positions", ["deleted_at"])

    # =========================================================
    # 3) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'client'"),
        ),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        sa.Column("position_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        # Unicidad sobre cualquier status (incluye deleted)
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.ForeignKeyConstraint(
            ["position_id"],
            ["positions.id"],
            name="fk_users_position_id__positions",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "role IN ('employee','admin','client')", name="ck_users_role"
        ),
        sa.CheckConstraint(
            "status IN ('active','inactive','deleted')", name="ck_users_status"
        ),
    )
    op.create_index("ix_users_position_id", "users", ["position_id"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # =========================================================
    # 4) CAMPS
    # =========================================================
    op.create_table(
        "camps",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_camps"),
        sa.UniqueConstraint("name", name="uq_camps_name"),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["users.id"],
            name="fk_camps_employee_id__users",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint("status IN ('active','inactive')", name="ck_camps_status"),
    )
    op.create_index("ix_camps_employee_id", "camps", ["employee_id"])

    # =========================================================
    # 5) ATTENDANCES
    # =========================================================
    op.create_table(
        "attendances",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("entry_time", sa.Time, nullable=True),
        sa.Column("exit_time", sa.Time, nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'present'"),
        ),
        sa.Column("observations", sa.String(500), nullable=True),
        sa.Column(
            "record_status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_attendances"),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["users.id"],
            name="fk_attendances_employee_id__users",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "status IN ('present','absent','late','justified')",
            name="ck_attendances_status",
        ),
        sa.CheckConstraint(
            "record_status IN ('active','inactive','deleted')",
            name="ck_attendances_record_status",
        ),
    )
    op.create_index("ix_attendances_date", "attendances", ["date"])
    op.create_index("ix_attendances_employee_id", "attendances", ["employee_id"])

    # A lo sumo un registro vivo por (employee_id, date): los borrados no cuentan.
    op.execute(
        "CREATE UNIQUE INDEX uq_attendances_employee_date_live "
        "ON attendances (employee_id, date) "
        "WHERE record_status IN ('active', 'inactive')"
    )


def downgrade() -> None:
    """
    Downgrade NO soportado para la migración fundacional.

    Para resetear el entorno local: recrear la base y correr `alembic upgrade head`.
    """
    raise NotImplementedError(
        "Baseline: downgrade no soportado por política. "
        "Para resetear la base de datos, recrearla y correr alembic upgrade head"
    )
