"""Tests for the orgfixture command line."""
from __future__ import annotations

from click.testing import CliRunner

import orgfixture.fixture as fixture_mod
from orgfixture.cli import cli
from orgfixture.errors import StoreUnavailable


def test_show_nested(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["show"])
    assert result.exit_code == 0, result.output
    assert "1\tBoston Alice\t1\tEast Coast Team" in result.output
    assert "2\tSeattle Bob\t2\tWest Coast Team" in result.output


def test_show_flat(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["show", "--flat"])
    assert result.exit_code == 0, result.output
    assert "1\tBoston Alice\t1" in result.output
    assert "East Coast Team" not in result.output


def test_show_keep(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fixture_dir = tmp_path / "fx"
    result = CliRunner().invoke(cli, ["show", "--dir", str(fixture_dir), "--keep"])
    assert result.exit_code == 0, result.output
    assert "Kept" in result.output
    assert len(list(fixture_dir.glob("*.db"))) == 1


def test_check(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fixture_dir = tmp_path / "fx"
    result = CliRunner().invoke(cli, ["check", "--count", "10", "--dir", str(fixture_dir)])
    assert result.exit_code == 0, result.output
    assert "10 fixtures OK" in result.output
    assert list(fixture_dir.glob("*.db")) == []


def test_check_reports_store_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    result = CliRunner().invoke(cli, ["check", "--dir", str(blocker / "sub")])
    assert result.exit_code == 1
    assert "fixture 1/10" in result.output


def test_check_retries_transient_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ORGFIXTURE_MAX_ATTEMPTS", raising=False)
    real_provision = fixture_mod.provision
    calls = []

    def flaky(config, **kwargs):
        calls.append(config)
        if len(calls) == 1:
            raise StoreUnavailable("busy")
        return real_provision(config, **kwargs)

    monkeypatch.setattr(fixture_mod, "provision", flaky)
    result = CliRunner().invoke(cli, ["check", "--count", "1"])
    assert result.exit_code == 0, result.output
    assert "1 fixtures OK" in result.output
    assert len(calls) == 2
