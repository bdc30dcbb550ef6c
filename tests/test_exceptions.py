"""
Tests for the exception hierarchy.
"""

import pytest

from dbpools.exceptions import (
    ConfigurationError,
    DbPoolsError,
    InvalidNumericValueError,
    MissingRequiredValueError,
)


@pytest.mark.unit
class TestHierarchy:
    """Verify all exceptions inherit from DbPoolsError."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            MissingRequiredValueError,
            InvalidNumericValueError,
        ],
    )
    def test_inherits_from_dbpools_error(self, exc_class):
        assert issubclass(exc_class, DbPoolsError)

    def test_resolution_errors_are_configuration_errors(self):
        assert issubclass(MissingRequiredValueError, ConfigurationError)
        assert issubclass(InvalidNumericValueError, ConfigurationError)


@pytest.mark.unit
class TestExceptionMessages:
    """Test exception constructors and details."""

    def test_dbpools_error(self):
        e = DbPoolsError("boom", details={"key": "val"})
        assert str(e) == "boom"
        assert e.message == "boom"
        assert e.details == {"key": "val"}

    def test_details_default_empty(self):
        assert ConfigurationError("bad").details == {}

    def test_missing_required_value(self):
        e = MissingRequiredValueError("DATABASE_URL")
        assert "DATABASE_URL" in str(e)
        assert e.variable == "DATABASE_URL"
        assert e.details == {"variable": "DATABASE_URL"}

    def test_missing_required_value_reason(self):
        e = MissingRequiredValueError("READ_ONLY_REPLICA_URL", reason="must be set when using `DB_OFFLINE=leader`")
        assert str(e).endswith("must be set when using `DB_OFFLINE=leader`")

    def test_invalid_numeric_value(self):
        e = InvalidNumericValueError("DB_TIMEOUT", "a non-negative integer")
        assert "DB_TIMEOUT" in str(e)
        assert e.expected == "a non-negative integer"

    def test_to_dict(self):
        e = InvalidNumericValueError("DB_TIMEOUT", "a non-negative integer")
        assert e.to_dict() == {
            "error": "InvalidNumericValueError",
            "message": e.message,
            "variable": "DB_TIMEOUT",
            "expected": "a non-negative integer",
        }
