"""
dbpools - resolve primary and replica database pool settings from the environment.
"""

__version__ = "0.1.0"

# Configuration
from dbpools.config import (
    Base,
    DatabasePools,
    DbPoolConfig,
    DeploymentEnv,
    Environment,
    OfflineMode,
    get_database_pools,
    init_database_pools,
    reset_database_pools,
    resolve_database_pools,
)

# Exceptions
from dbpools.exceptions import (
    ConfigurationError,
    DbPoolsError,
    InvalidNumericValueError,
    MissingRequiredValueError,
)
from dbpools.secret import SecretString

# Logging utilities
from dbpools.utils.logging import get_logger, setup_logging

__all__ = [
    # Resolution
    "resolve_database_pools",
    "init_database_pools",
    "get_database_pools",
    "reset_database_pools",
    # Types
    "Base",
    "DeploymentEnv",
    "Environment",
    "DatabasePools",
    "DbPoolConfig",
    "OfflineMode",
    "SecretString",
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "DbPoolsError",
    "ConfigurationError",
    "MissingRequiredValueError",
    "InvalidNumericValueError",
]
