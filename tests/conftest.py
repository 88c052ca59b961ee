"""Shared test fixtures: seeded in-memory and file-backed stores."""
from __future__ import annotations

import pytest

from orgfixture.config import FixtureConfig
from orgfixture.fixture import provision


@pytest.fixture
def mem_fixture():
    """In-memory fixture with the default seed."""
    fixture = provision()
    yield fixture
    fixture.close()


@pytest.fixture
def fixture_dir(tmp_path):
    """Directory for file-backed fixtures."""
    path = tmp_path / "fixtures"
    return path


@pytest.fixture
def file_config(fixture_dir):
    return FixtureConfig(fixture_dir=fixture_dir)
