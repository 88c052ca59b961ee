"""Fixed seed rows inserted right after the schema is applied."""
from __future__ import annotations

import sqlite3
from dataclasses import dataclass


@dataclass(frozen=True)
class SeedData:
    teams: tuple[tuple[int, str], ...]
    employees: tuple[tuple[int, str, int], ...]


DEFAULT_SEED = SeedData(
    teams=(
        (1, "East Coast Team"),
        (2, "West Coast Team"),
    ),
    employees=(
        (1, "Boston Alice", 1),
        (2, "Seattle Bob", 2),
    ),
)


def insert_seed(conn: sqlite3.Connection, seed: SeedData = DEFAULT_SEED) -> None:
    """Insert teams, then employees. Does not commit."""
    conn.executemany("INSERT INTO teams (id, name) VALUES (?, ?)", seed.teams)
    conn.executemany(
        "INSERT INTO employees (id, name, team) VALUES (?, ?, ?)",
        seed.employees,
    )
