"""
Process-wide database pool configuration.

The configuration is resolved once at startup and then shared read-only by
the rest of the process. Setting it twice is an error: there is no runtime
reconfiguration.
"""

import threading

from dbpools.config.base import Base
from dbpools.config.database_pools import DatabasePools, resolve_database_pools
from dbpools.config.environment import Environment
from dbpools.exceptions import ConfigurationError
from dbpools.utils.logging import get_logger

logger = get_logger("dbpools.config.singleton")


class GlobalDatabasePools:
    """Holder for the process's resolved DatabasePools."""

    _instance: DatabasePools | None = None
    _lock = threading.Lock()

    @classmethod
    def set_pools(cls, pools: DatabasePools) -> None:
        """Store the resolved pools; fails if they were already stored."""
        with cls._lock:
            if cls._instance is not None:
                raise ConfigurationError("Database pools are already initialized")
            cls._instance = pools

    @classmethod
    def get_pools(cls) -> DatabasePools | None:
        """Get the stored pools, None if not initialized."""
        return cls._instance

    @classmethod
    def reset_pools(cls) -> None:
        """Forget the stored pools (for testing)."""
        with cls._lock:
            cls._instance = None


def init_database_pools(environment: Environment | None = None, base: Base | None = None) -> DatabasePools:
    """
    Resolve database pool settings and store them for the process.

    Args:
        environment: Environment snapshot (default: process environment plus .env)
        base: Deployment settings (default: derived from the environment)

    Returns:
        The resolved DatabasePools

    Raises:
        ConfigurationError: resolution failed, or pools were already initialized
    """
    if environment is None:
        environment = Environment.load()
    if base is None:
        base = Base.from_environment(environment)

    try:
        pools = resolve_database_pools(environment, base)
    except ConfigurationError as e:
        logger.error(f"Database pool configuration failed: {e.message}", extra={"details": e.to_dict()})
        raise

    GlobalDatabasePools.set_pools(pools)
    return pools


def get_database_pools() -> DatabasePools:
    """
    Get the process's DatabasePools.

    Raises:
        ConfigurationError: init_database_pools() has not been called
    """
    pools = GlobalDatabasePools.get_pools()
    if pools is None:
        raise ConfigurationError("Database pools not initialized. Call init_database_pools() first.")
    return pools


def reset_database_pools() -> None:
    """Forget the process's DatabasePools (for testing)."""
    GlobalDatabasePools.reset_pools()
