"""
Opaque wrapper for secret strings such as database URLs.

The wrapped value never shows up in str(), repr(), format() or log output.
Use expose_secret() to read it.
"""

from __future__ import annotations

from typing import Any

REDACTED = "[REDACTED]"


class SecretString:
    """A string that refuses to render itself."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        if isinstance(value, SecretString):
            value = value.expose_secret()
        if not isinstance(value, str):
            raise TypeError(f"SecretString expects str, got {type(value).__name__}")
        object.__setattr__(self, "_value", value)

    def expose_secret(self) -> str:
        """Return the wrapped plaintext value."""
        return self._value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("SecretString is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("SecretString is immutable")

    def __repr__(self) -> str:
        return f"SecretString('{REDACTED}')"

    def __str__(self) -> str:
        return REDACTED

    def __format__(self, format_spec: str) -> str:
        return format(REDACTED, format_spec)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SecretString):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((SecretString, self._value))

    def __bool__(self) -> bool:
        return bool(self._value)

    def __copy__(self) -> SecretString:
        return self

    def __deepcopy__(self, memo: dict) -> SecretString:
        return self

    def __reduce__(self) -> Any:
        return (SecretString, (self._value,))
