"""Read queries for the teams table."""
from __future__ import annotations

import sqlite3

from orgfixture.db.decode import decode_team
from orgfixture.models import Team, TeamId


class TeamRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, team_id: TeamId) -> Team | None:
        """Look up a single team by id."""
        row = self.conn.execute(
            "SELECT id, name FROM teams WHERE id = ?",
            (team_id,),
        ).fetchone()
        return decode_team(row) if row else None

    def list_all(self) -> list[Team]:
        rows = self.conn.execute("SELECT id, name FROM teams ORDER BY id").fetchall()
        return [decode_team(row) for row in rows]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM teams").fetchone()[0]
