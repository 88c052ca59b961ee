"""Read queries for the employees table, flat or joined with teams."""
from __future__ import annotations

import sqlite3

from orgfixture.db.decode import decode_employee_flat, decode_employee_nested
from orgfixture.models import Employee, EmployeeWithTeamId

EMPLOYEE_FLAT_SQL = "SELECT id, name, team FROM employees"

EMPLOYEE_JOIN_SQL = """SELECT e.id AS id, e.name AS name,
                  t.id AS team_id, t.name AS team_name
           FROM employees e
           JOIN teams t ON t.id = e.team"""


class EmployeeRepo:
    """Employee queries.

    Nested records are produced by the join only. A flat record never
    loads its team; use TeamRepo.get(record.team) for that.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get_with_team_id(self, employee_id: int) -> EmployeeWithTeamId | None:
        row = self.conn.execute(
            f"{EMPLOYEE_FLAT_SQL} WHERE id = ?",
            (employee_id,),
        ).fetchone()
        return decode_employee_flat(row) if row else None

    def get(self, employee_id: int) -> Employee | None:
        """Fetch one employee with its team resolved via the join."""
        row = self.conn.execute(
            f"{EMPLOYEE_JOIN_SQL} WHERE e.id = ?",
            (employee_id,),
        ).fetchone()
        return decode_employee_nested(row) if row else None

    def list_with_team_id(self) -> list[EmployeeWithTeamId]:
        rows = self.conn.execute(f"{EMPLOYEE_FLAT_SQL} ORDER BY id").fetchall()
        return [decode_employee_flat(row) for row in rows]

    def list_all(self) -> list[Employee]:
        rows = self.conn.execute(f"{EMPLOYEE_JOIN_SQL} ORDER BY e.id").fetchall()
        return [decode_employee_nested(row) for row in rows]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM employees").fetchone()[0]
