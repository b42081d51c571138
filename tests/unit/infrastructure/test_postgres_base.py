"""
Name: Postgres Repository Base Tests

Responsibilities:
  - ILIKE pattern escaping
  - Translation of psycopg integrity errors into ConstraintViolationError
  - Unknown failures wrapped as DatabaseError
"""

from unittest.mock import MagicMock

import pytest
from psycopg import errors as pg_errors

from hr_api.crosscutting.exceptions import (
    ConstraintKind,
    ConstraintViolationError,
    DatabaseError,
)
from hr_api.infrastructure.repositories.postgres.base import (
    PostgresRepository,
    like_pattern,
)

pytestmark = pytest.mark.unit


def _repo_raising(exc: Exception) -> PostgresRepository:
    conn = MagicMock()
    conn.execute.side_effect = exc
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    pool.connection.return_value.__exit__.return_value = False
    return PostgresRepository(pool=pool)


@pytest.mark.parametrize(
    "term, expected",
    [
        ("ana", "%ana%"),
        ("50%", "%50\\%%"),
        ("a_b", "%a\\_b%"),
        ("c:\\tmp", "%c:\\\\tmp%"),
    ],
)
def test_like_pattern_escapes_wildcards(term, expected):
    assert like_pattern(term) == expected


def test_unique_violation_becomes_constraint_error():
    repo = _repo_raising(pg_errors.UniqueViolation("duplicate key"))

    with pytest.raises(ConstraintViolationError) as exc_info:
        repo._fetchone("create", "INSERT ...")

    assert exc_info.value.kind == ConstraintKind.UNIQUE
    assert exc_info.value.is_unique


def test_foreign_key_violation_becomes_constraint_error():
    repo = _repo_raising(pg_errors.ForeignKeyViolation("missing parent"))

    with pytest.raises(ConstraintViolationError) as exc_info:
        repo._execute("update", "UPDATE ...")

    assert exc_info.value.is_foreign_key


def test_unexpected_error_is_wrapped():
    original = RuntimeError("connection lost")
    repo = _repo_raising(original)

    with pytest.raises(DatabaseError) as exc_info:
        repo._fetchall("list", "SELECT 1")

    assert not isinstance(exc_info.value, ConstraintViolationError)
    assert exc_info.value.original_error is original
    assert "list failed" in exc_info.value.message
