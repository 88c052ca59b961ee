"""Error taxonomy for fixture provisioning and row decoding."""
from __future__ import annotations


class FixtureError(Exception):
    """Base class for every error raised by orgfixture."""
    pass


class ConfigError(FixtureError):
    """Malformed configuration value."""
    pass


class StoreUnavailable(FixtureError):
    """The store could not be created or opened."""
    pass


class SchemaApplyFailed(FixtureError):
    """A schema statement was rejected."""
    pass


class SeedInsertFailed(FixtureError):
    """A seed row violated a constraint."""
    pass


class SetupTimeout(FixtureError):
    """Provisioning did not finish within the configured deadline."""

    def __init__(self, stage: str, timeout: float):
        self.stage = stage
        self.timeout = timeout
        super().__init__(f"fixture setup exceeded {timeout}s during {stage}")


class DecodeError(FixtureError):
    """A result row does not match the target record shape."""

    def __init__(self, column: str, expected: str, actual: str):
        self.column = column
        self.expected = expected
        self.actual = actual
        super().__init__(f"column {column!r}: expected {expected}, got {actual}")
