"""Explicit row-to-record mappers, one per record shape.

Rows may be ``sqlite3.Row`` objects or plain mappings. Nested employees
come from a join that exposes the team columns as ``team_id`` and
``team_name``; ``decode_employee_nested`` hands those to ``decode_team``.
"""
from __future__ import annotations

from typing import Any

from orgfixture.errors import DecodeError
from orgfixture.models import Employee, EmployeeWithTeamId, Team

TEAM_PREFIX = "team_"


def _column(row: Any, column: str) -> Any:
    if not hasattr(row, "keys"):
        raise DecodeError(column, "a mapping row", type(row).__name__)
    if column not in row.keys():
        raise DecodeError(column, "a column", "missing")
    value = row[column]
    if value is None:
        raise DecodeError(column, "non-null value", "NULL")
    return value


def _unsigned(row: Any, column: str) -> int:
    value = _column(row, column)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(column, "unsigned integer", type(value).__name__)
    if value < 0:
        raise DecodeError(column, "unsigned integer", f"negative value {value}")
    return value


def _text(row: Any, column: str) -> str:
    value = _column(row, column)
    if not isinstance(value, str):
        raise DecodeError(column, "text", type(value).__name__)
    return value


def decode_team(row: Any, prefix: str = "") -> Team:
    """Decode ``<prefix>id`` and ``<prefix>name`` into a Team."""
    return Team(id=_unsigned(row, f"{prefix}id"), name=_text(row, f"{prefix}name"))


def decode_employee_flat(row: Any) -> EmployeeWithTeamId:
    """Decode (id, name, team) with team kept as the foreign key."""
    return EmployeeWithTeamId(
        id=_unsigned(row, "id"),
        name=_text(row, "name"),
        team=_unsigned(row, "team"),
    )


def decode_employee_nested(row: Any) -> Employee:
    """Decode a joined (id, name, team_id, team_name) row."""
    return Employee(
        id=_unsigned(row, "id"),
        name=_text(row, "name"),
        team=decode_team(row, prefix=TEAM_PREFIX),
    )
