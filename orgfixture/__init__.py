"""Disposable, seeded SQLite fixtures for teams and employees."""
from orgfixture.errors import (
    ConfigError,
    DecodeError,
    FixtureError,
    SchemaApplyFailed,
    SeedInsertFailed,
    SetupTimeout,
    StoreUnavailable,
)
from orgfixture.fixture import Fixture, aprovision, provision, provision_with_retry
from orgfixture.models import Employee, EmployeeWithTeamId, Team, TeamId

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DecodeError",
    "Employee",
    "EmployeeWithTeamId",
    "Fixture",
    "FixtureError",
    "SchemaApplyFailed",
    "SeedInsertFailed",
    "SetupTimeout",
    "StoreUnavailable",
    "Team",
    "TeamId",
    "aprovision",
    "provision",
    "provision_with_retry",
]
