"""
Environment snapshots.

An Environment is a read-only copy of environment variables taken once at
startup. Resolution reads from it instead of os.environ so tests can inject
any set of variables without touching the real process environment.
"""

import os
from collections.abc import Iterator, Mapping
from pathlib import Path

from dotenv import dotenv_values

from dbpools.utils.logging import get_logger

logger = get_logger("dbpools.config.environment")


class Environment(Mapping[str, str]):
    """Immutable mapping of environment variable names to values."""

    def __init__(self, variables: Mapping[str, str] | None = None):
        self._variables: dict[str, str] = dict(variables or {})

    @classmethod
    def from_process(cls) -> "Environment":
        """Snapshot the current process environment."""
        return cls(os.environ)

    @classmethod
    def load(cls, dotenv_path: str | Path | None = None) -> "Environment":
        """
        Snapshot the process environment, filling gaps from a .env file.

        Process variables take precedence; values from the file are only used
        for names the process does not define. A missing file is ignored.

        Args:
            dotenv_path: Path to the .env file (default: .env in the current directory)

        Returns:
            Environment snapshot
        """
        if dotenv_path is None:
            dotenv_path = Path.cwd() / ".env"
        dotenv_path = Path(dotenv_path)

        variables: dict[str, str] = {}
        if dotenv_path.is_file():
            file_values = dotenv_values(dotenv_path)
            # Keys declared without a value come back as None
            variables.update({k: v for k, v in file_values.items() if v is not None})
            logger.debug(f"Loaded {len(variables)} variable(s) from {dotenv_path}")
        else:
            logger.debug(f"No .env file at {dotenv_path}, using process environment only")

        variables.update(os.environ)
        return cls(variables)

    def is_set(self, name: str) -> bool:
        """Return True if the variable is present, even with an empty value."""
        return name in self._variables

    def __getitem__(self, name: str) -> str:
        return self._variables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        # Values may hold credentials, only show names
        return f"Environment({sorted(self._variables)})"
