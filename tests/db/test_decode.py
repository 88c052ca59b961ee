"""Tests for the row decoders."""
from __future__ import annotations

import pytest

from orgfixture.db.decode import decode_employee_flat, decode_employee_nested, decode_team
from orgfixture.errors import DecodeError
from orgfixture.models import Employee, EmployeeWithTeamId, Team


def test_decode_team():
    assert decode_team({"id": 1, "name": "East Coast Team"}) == Team(1, "East Coast Team")


def test_decode_team_with_prefix():
    row = {"id": 7, "name": "Boston Alice", "team_id": 2, "team_name": "West Coast Team"}
    assert decode_team(row, prefix="team_") == Team(2, "West Coast Team")


def test_decode_employee_flat():
    row = {"id": 1, "name": "Boston Alice", "team": 1}
    assert decode_employee_flat(row) == EmployeeWithTeamId(1, "Boston Alice", 1)


def test_decode_employee_nested():
    row = {"id": 1, "name": "Boston Alice", "team_id": 1, "team_name": "East Coast Team"}
    emp = decode_employee_nested(row)
    assert emp == Employee(1, "Boston Alice", Team(1, "East Coast Team"))
    assert emp.with_team_id() == EmployeeWithTeamId(1, "Boston Alice", 1)


def test_decode_sqlite_row(mem_fixture):
    row = mem_fixture.conn.execute(
        "SELECT id, name, team FROM employees WHERE id = 2"
    ).fetchone()
    assert decode_employee_flat(row) == EmployeeWithTeamId(2, "Seattle Bob", 2)


def test_missing_column():
    with pytest.raises(DecodeError) as exc_info:
        decode_employee_flat({"id": 1, "name": "Boston Alice"})
    assert exc_info.value.column == "team"
    assert exc_info.value.actual == "missing"


def test_missing_nested_team_column():
    with pytest.raises(DecodeError) as exc_info:
        decode_employee_nested({"id": 1, "name": "Boston Alice", "team_id": 1})
    assert exc_info.value.column == "team_name"


def test_null_name():
    with pytest.raises(DecodeError) as exc_info:
        decode_team({"id": 1, "name": None})
    assert exc_info.value.column == "name"
    assert exc_info.value.actual == "NULL"


def test_type_mismatch_on_id():
    with pytest.raises(DecodeError) as exc_info:
        decode_team({"id": "1", "name": "East Coast Team"})
    err = exc_info.value
    assert err.column == "id"
    assert err.expected == "unsigned integer"
    assert err.actual == "str"
    assert "'id'" in str(err)


def test_bool_is_not_an_id():
    with pytest.raises(DecodeError) as exc_info:
        decode_employee_flat({"id": 1, "name": "Boston Alice", "team": True})
    assert exc_info.value.actual == "bool"


def test_negative_id():
    with pytest.raises(DecodeError) as exc_info:
        decode_team({"id": -3, "name": "East Coast Team"})
    assert exc_info.value.column == "id"


def test_name_must_be_text():
    with pytest.raises(DecodeError) as exc_info:
        decode_employee_flat({"id": 1, "name": 42, "team": 1})
    assert exc_info.value.column == "name"
    assert exc_info.value.actual == "int"


def test_tuple_row_rejected():
    with pytest.raises(DecodeError) as exc_info:
        decode_team((1, "East Coast Team"))
    assert exc_info.value.actual == "tuple"


def test_decode_error_does_not_touch_store(mem_fixture):
    row = mem_fixture.conn.execute("SELECT id, name FROM employees WHERE id = 1").fetchone()
    with pytest.raises(DecodeError):
        decode_employee_flat(row)
    assert mem_fixture.employees.count() == 2
