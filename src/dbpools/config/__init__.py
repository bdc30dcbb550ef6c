"""
Configuration management.

Environment snapshots, deployment settings and database pool resolution.
"""

from dbpools.config.base import Base, DeploymentEnv
from dbpools.config.database_pools import DatabasePools, DbPoolConfig, OfflineMode, resolve_database_pools
from dbpools.config.environment import Environment
from dbpools.config.singleton import get_database_pools, init_database_pools, reset_database_pools

__all__ = [
    "Base",
    "DeploymentEnv",
    "Environment",
    "DatabasePools",
    "DbPoolConfig",
    "OfflineMode",
    "resolve_database_pools",
    "init_database_pools",
    "get_database_pools",
    "reset_database_pools",
]
