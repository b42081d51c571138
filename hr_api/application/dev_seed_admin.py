# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (Local-only)
===============================================================================

Name:
    Dev Seed Admin (Local-only)

Qué es:
    Asegura que exista un usuario admin para desarrollo cuando está
    configurado (DEV_SEED_ADMIN=true). El registro público permite cualquier
    rol, pero un entorno recién migrado necesita un admin para operar.

Seguridad:
    - Guard estricto: solo corre en app_env == "local".

Patrones:
    - Task orchestration (seed)
    - Dependency Injection (repo + hasher)
    - Fail-fast guard (safety boundary)
    - Idempotencia (ensure-create / optional reset)

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Resolver spec desde Settings
      - Asegurar usuario (create o update si force_reset)
    Collaborators:
      - UserRepository
      - password_hasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole, UserStatus, normalize_email


@dataclass(frozen=True, slots=True)
class _AdminSeedSpec:
    """Resolved seed configuration (no I/O)."""

    name: str
    email: str
    password: str
    force_reset: bool


def _resolve_seed_spec(settings: Settings) -> _AdminSeedSpec:
    return _AdminSeedSpec(
        name=(settings.dev_seed_admin_name or "").strip(),
        email=normalize_email(settings.dev_seed_admin_email),
        password=settings.dev_seed_admin_password or "",
        force_reset=bool(settings.dev_seed_admin_force_reset),
    )


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env != "local":
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but ENV is '{env}' (must be 'local'). "
            "Safety guard prevents accidental overrides."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> User | None:
    """
    Ensure a development admin user exists if configured.

    Behavior:
      - If disabled: no-op (None)
      - If enabled:
          - Create user if missing
          - If force_reset: update password/role/status
          - Otherwise: skip if exists
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    spec = _resolve_seed_spec(settings)
    if not spec.email or not spec.password or not spec.name:
        raise ValueError("Dev seed admin is enabled but name/email/password are empty")

    logger.info(
        "Dev seed admin: ensuring admin user",
        extra={"email": spec.email, "force_reset": spec.force_reset},
    )

    existing = user_repo.get_user_by_email(spec.email)

    if existing is None:
        created = user_repo.create_user(
            User(
                id=uuid4(),
                name=spec.name,
                email=spec.email,
                password_hash=password_hasher(spec.password),
                role=UserRole.ADMIN,
                status=UserStatus.ACTIVE,
            )
        )
        logger.info("Dev seed admin: user created", extra={"email": spec.email})
        return created

    if spec.force_reset:
        updated = user_repo.update_user(
            existing.with_changes(
                password_hash=password_hasher(spec.password),
                role=UserRole.ADMIN,
                status=UserStatus.ACTIVE,
            )
        )
        logger.info("Dev seed admin: user reset applied", extra={"email": spec.email})
        return updated

    logger.info("Dev seed admin: user exists; skipping", extra={"email": spec.email})
    return existing
