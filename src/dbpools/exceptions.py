"""
dbpools exception hierarchy.

All domain-specific exceptions inherit from DbPoolsError, so callers can catch
any resolution failure with a single base class while still handling the
individual cases when needed.

Hierarchy::

    DbPoolsError
    └── ConfigurationError             - resolution failed, process must not start
        ├── MissingRequiredValueError  - a required variable is absent
        └── InvalidNumericValueError   - a numeric variable could not be parsed

Messages and details carry variable names only, never their values.
"""

from __future__ import annotations


class DbPoolsError(Exception):
    """Base exception for all dbpools errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Return a dict suitable for structured log output."""
        return {"error": type(self).__name__, "message": self.message, **self.details}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(DbPoolsError):
    """Raised when database pool configuration cannot be resolved.

    Always fatal: the process must not continue starting up.
    """


class MissingRequiredValueError(ConfigurationError):
    """Raised when a required environment variable is not set."""

    def __init__(self, variable: str, *, reason: str | None = None) -> None:
        message = f"Missing required environment variable `{variable}`"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, details={"variable": variable})
        self.variable = variable


class InvalidNumericValueError(ConfigurationError):
    """Raised when a numeric environment variable holds an unparseable value."""

    def __init__(self, variable: str, expected: str) -> None:
        super().__init__(
            f"Couldn't parse `{variable}`: expected {expected}",
            details={"variable": variable, "expected": expected},
        )
        self.variable = variable
        self.expected = expected
