"""Command line entry point.

Usage:
    orgfixture show                    # nested employees from an in-memory fixture
    orgfixture show --flat --dir ./fx  # team ids, file-backed fixture
    orgfixture check --count 10 --dir ./fx
"""
from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from orgfixture import __version__
from orgfixture.config import load_config
from orgfixture.errors import FixtureError
from orgfixture.fixture import provision_with_retry

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def _config(fixture_dir: Optional[Path], keep: bool = False):
    config = load_config()
    if fixture_dir is not None:
        config = replace(config, fixture_dir=fixture_dir)
    if keep:
        config = replace(config, keep_files=True)
    return config


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging (DEBUG level)")
def cli(verbose: bool):
    """Provision and inspect seeded team/employee fixtures."""
    _setup_logging(verbose)


@cli.command()
@click.option(
    "--dir",
    "fixture_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for a file-backed fixture (default: in-memory)",
)
@click.option("--nested/--flat", default=True, help="Resolve teams or keep team ids")
@click.option("--keep", is_flag=True, help="Keep the database file after exit")
def show(fixture_dir: Optional[Path], nested: bool, keep: bool):
    """Provision a fixture and print its employees."""
    try:
        fixture = provision_with_retry(_config(fixture_dir, keep))
    except FixtureError as e:
        raise click.ClickException(str(e)) from e

    with fixture:
        if nested:
            for emp in fixture.employees.list_all():
                click.echo(f"{emp.id}\t{emp.name}\t{emp.team.id}\t{emp.team.name}")
        else:
            for emp in fixture.employees.list_with_team_id():
                click.echo(f"{emp.id}\t{emp.name}\t{emp.team}")
        if keep and fixture.path is not None:
            click.echo(f"Kept {fixture.path}")


@cli.command()
@click.option(
    "--dir",
    "fixture_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for file-backed fixtures (default: in-memory)",
)
@click.option("--count", "-n", type=click.IntRange(min=1), default=10, help="Fixtures to provision")
def check(fixture_dir: Optional[Path], count: int):
    """Provision fixtures in sequence and verify their contents."""
    config = _config(fixture_dir)
    seen: set[str] = set()

    for i in range(count):
        try:
            fixture = provision_with_retry(config)
        except FixtureError as e:
            raise click.ClickException(f"fixture {i + 1}/{count}: {e}") from e

        with fixture:
            teams = fixture.teams.count()
            employees = fixture.employees.count()
            location = fixture.location
            if teams != 2 or employees != 2:
                raise click.ClickException(
                    f"{location}: expected 2 teams / 2 employees, got {teams} / {employees}"
                )
            if fixture.path is not None:
                if location in seen:
                    raise click.ClickException(f"location reused: {location}")
                seen.add(location)
        logger.debug("Fixture %d/%d OK at %s", i + 1, count, location)

    click.echo(f"{count} fixtures OK")


def main():
    cli()


if __name__ == "__main__":
    main()
