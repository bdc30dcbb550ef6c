"""
Configuration for setting up database pools.

Variables read from the environment:

- ``DATABASE_URL``: URL of the postgres database to use.
- ``READ_ONLY_REPLICA_URL``: URL of an optional postgres read-only replica.
- ``DB_PRIMARY_POOL_SIZE``: number of connections of the primary database.
- ``DB_REPLICA_POOL_SIZE``: number of connections of the read-only replica.
- ``DB_PRIMARY_MIN_IDLE``: the primary pool keeps at least this many connections.
- ``DB_REPLICA_MIN_IDLE``: the replica pool keeps at least this many connections.
- ``DB_OFFLINE``: ``leader`` uses the read-only follower as if it was the
  leader; ``follower`` acts as if ``READ_ONLY_REPLICA_URL`` was unset.
- ``READ_ONLY_MODE``: if defined (even empty) the primary is opened read-only.
- ``DB_TCP_TIMEOUT_MS``: TCP timeout in milliseconds.
- ``DB_TIMEOUT``: connection and statement timeout in seconds.
- ``DB_HELPER_THREADS``: threads for asynchronous work such as connection creation.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from dbpools.config.base import Base
from dbpools.config.environment import Environment
from dbpools.exceptions import InvalidNumericValueError, MissingRequiredValueError
from dbpools.secret import SecretString
from dbpools.utils.logging import get_logger

logger = get_logger("dbpools.config.database_pools")

DEFAULT_POOL_SIZE = 3
DEFAULT_TCP_TIMEOUT_MS = 15 * 1000
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_HELPER_THREADS = 3

_UNSIGNED_INT = re.compile(r"\+?[0-9]+")

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
# Largest whole number of seconds a timedelta can hold
MAX_TIMEOUT_SECONDS = timedelta.max.days * 86400 + timedelta.max.seconds


class OfflineMode(Enum):
    """Operator override selected by ``DB_OFFLINE``."""

    NORMAL = "normal"
    # The leader is down: the follower stands in as a read-only primary
    LEADER = "leader"
    # The follower is down: run without a replica
    FOLLOWER = "follower"

    @classmethod
    def from_value(cls, value: str | None) -> "OfflineMode":
        """Map a raw ``DB_OFFLINE`` value to a mode; unknown values mean normal."""
        if value == "leader":
            return cls.LEADER
        if value == "follower":
            return cls.FOLLOWER
        return cls.NORMAL


@dataclass(frozen=True)
class DbPoolConfig:
    """Settings for a single connection pool."""

    url: SecretString = field(repr=False)
    read_only_mode: bool
    pool_size: int
    # None leaves the choice to the pool implementation
    min_idle: int | None = None

    def describe(self) -> dict[str, Any]:
        """Return a log-safe summary of this pool."""
        return {
            "url": str(self.url),
            "read_only_mode": self.read_only_mode,
            "pool_size": self.pool_size,
            "min_idle": self.min_idle,
        }


@dataclass(frozen=True)
class DatabasePools:
    """Resolved settings for the primary and optional replica pools."""

    # Usually writeable, read-only with READ_ONLY_MODE or DB_OFFLINE=leader
    primary: DbPoolConfig
    # Always read-only when present
    replica: DbPoolConfig | None
    # How long unacknowledged TCP packets are tolerated before the connection is
    # treated as broken. Too high prolongs an outage on full packet loss, too low
    # drops healthy connections.
    tcp_timeout_ms: int
    # Time to wait for a connection to become available from the pool
    connection_timeout: timedelta
    # Time to wait for a query response before canceling the query
    statement_timeout: timedelta
    # Threads for asynchronous operations such as connection creation
    helper_threads: int
    # Whether every database connection must be encrypted with TLS
    enforce_tls: bool
    offline_mode: OfflineMode = OfflineMode.NORMAL

    @classmethod
    def from_environment(cls, environment: Environment, base: Base) -> "DatabasePools":
        """Load settings for one or more database pools from the environment."""
        return resolve_database_pools(environment, base)

    def are_all_read_only(self) -> bool:
        """True if every configured pool is read-only.

        A replica is always read-only, so the primary decides.
        """
        return self.primary.read_only_mode

    def pools(self) -> Iterator[tuple[str, DbPoolConfig]]:
        """Yield ``(name, config)`` for each configured pool, primary first."""
        yield "primary", self.primary
        if self.replica is not None:
            yield "replica", self.replica

    def describe(self) -> dict[str, Any]:
        """Return a log-safe summary of the resolved configuration."""
        return {
            "offline_mode": self.offline_mode.value,
            "primary": self.primary.describe(),
            "replica": self.replica.describe() if self.replica is not None else None,
            "tcp_timeout_ms": self.tcp_timeout_ms,
            "connection_timeout_seconds": self.connection_timeout.total_seconds(),
            "statement_timeout_seconds": self.statement_timeout.total_seconds(),
            "helper_threads": self.helper_threads,
            "enforce_tls": self.enforce_tls,
        }


def _parse_unsigned(environment: Environment, name: str, *, maximum: int, positive: bool = False) -> int | None:
    """Parse an optional integer variable in ``[0, maximum]`` (``[1, maximum]`` if positive), None when unset."""
    raw = environment.get(name)
    if raw is None:
        return None
    minimum = 1 if positive else 0
    expected = f"an integer between {minimum} and {maximum}"
    if not _UNSIGNED_INT.fullmatch(raw):
        raise InvalidNumericValueError(name, expected)
    value = int(raw)
    if not minimum <= value <= maximum:
        raise InvalidNumericValueError(name, expected)
    return value


def _with_default(value: int | None, default: int) -> int:
    return default if value is None else value


def _require(environment: Environment, name: str, reason: str | None = None) -> SecretString:
    raw = environment.get(name)
    if raw is None:
        raise MissingRequiredValueError(name, reason=reason)
    return SecretString(raw)


def resolve_database_pools(environment: Environment, base: Base) -> DatabasePools:
    """
    Resolve database pool settings from an environment snapshot.

    Every scalar setting is parsed up front regardless of mode, so a malformed
    value fails even when the pool it belongs to ends up unused.

    Args:
        environment: Environment snapshot to read from
        base: Deployment settings; TLS is enforced in production only

    Returns:
        Resolved DatabasePools

    Raises:
        MissingRequiredValueError: DATABASE_URL is unset outside DB_OFFLINE=leader,
            or READ_ONLY_REPLICA_URL is unset with DB_OFFLINE=leader
        InvalidNumericValueError: a numeric variable could not be parsed
    """
    primary_pool_size = _with_default(
        _parse_unsigned(environment, "DB_PRIMARY_POOL_SIZE", maximum=U32_MAX, positive=True), DEFAULT_POOL_SIZE
    )
    replica_pool_size = _with_default(
        _parse_unsigned(environment, "DB_REPLICA_POOL_SIZE", maximum=U32_MAX, positive=True), DEFAULT_POOL_SIZE
    )
    primary_min_idle = _parse_unsigned(environment, "DB_PRIMARY_MIN_IDLE", maximum=U32_MAX)
    replica_min_idle = _parse_unsigned(environment, "DB_REPLICA_MIN_IDLE", maximum=U32_MAX)
    tcp_timeout_ms = _with_default(
        _parse_unsigned(environment, "DB_TCP_TIMEOUT_MS", maximum=U64_MAX), DEFAULT_TCP_TIMEOUT_MS
    )
    timeout_seconds = _with_default(
        _parse_unsigned(environment, "DB_TIMEOUT", maximum=MAX_TIMEOUT_SECONDS), DEFAULT_TIMEOUT_SECONDS
    )
    connection_timeout = timedelta(seconds=timeout_seconds)
    # DB_TIMEOUT configures both timeouts
    statement_timeout = connection_timeout
    helper_threads = _with_default(
        _parse_unsigned(environment, "DB_HELPER_THREADS", maximum=U64_MAX), DEFAULT_HELPER_THREADS
    )

    enforce_tls = base.is_production
    read_only_mode = environment.is_set("READ_ONLY_MODE")
    follower_url = environment.get("READ_ONLY_REPLICA_URL")
    mode = OfflineMode.from_value(environment.get("DB_OFFLINE"))

    shared: dict[str, Any] = {
        "tcp_timeout_ms": tcp_timeout_ms,
        "connection_timeout": connection_timeout,
        "statement_timeout": statement_timeout,
        "helper_threads": helper_threads,
        "enforce_tls": enforce_tls,
        "offline_mode": mode,
    }

    if mode is OfflineMode.LEADER:
        primary = DbPoolConfig(
            url=_require(environment, "READ_ONLY_REPLICA_URL", reason="must be set when using `DB_OFFLINE=leader`"),
            read_only_mode=True,
            pool_size=primary_pool_size,
            min_idle=primary_min_idle,
        )
        pools = DatabasePools(primary=primary, replica=None, **shared)
    else:
        primary = DbPoolConfig(
            url=_require(environment, "DATABASE_URL"),
            read_only_mode=read_only_mode,
            pool_size=primary_pool_size,
            min_idle=primary_min_idle,
        )
        replica = None
        if mode is OfflineMode.FOLLOWER:
            if follower_url is not None:
                logger.debug("DB_OFFLINE=follower, ignoring READ_ONLY_REPLICA_URL")
        elif follower_url is not None:
            # Some deployments attach the same writeable database to both
            # variables, so the replica is opened read-only regardless of URL.
            replica = DbPoolConfig(
                url=SecretString(follower_url),
                read_only_mode=True,
                pool_size=replica_pool_size,
                min_idle=replica_min_idle,
            )
        pools = DatabasePools(primary=primary, replica=replica, **shared)

    logger.info(
        f"Resolved database pools (mode={mode.value}, replica={'yes' if pools.replica is not None else 'no'}, "
        f"read_only={pools.are_all_read_only()}, enforce_tls={enforce_tls})"
    )
    logger.debug(f"Database pool settings: {pools.describe()}")
    return pools
