"""Typed records for the teams and employees tables."""
from __future__ import annotations

from dataclasses import dataclass

TeamId = int


@dataclass(frozen=True)
class Team:
    id: TeamId
    name: str


@dataclass(frozen=True)
class EmployeeWithTeamId:
    """Employee with the team kept as a raw foreign key."""

    id: int
    name: str
    team: TeamId


@dataclass(frozen=True)
class Employee:
    """Employee with the team resolved into its own record."""

    id: int
    name: str
    team: Team

    def with_team_id(self) -> EmployeeWithTeamId:
        return EmployeeWithTeamId(id=self.id, name=self.name, team=self.team.id)
