"""
Deployment-level settings shared by every configuration section.
"""

from dataclasses import dataclass
from enum import Enum

from dbpools.config.environment import Environment


class DeploymentEnv(Enum):
    """Where the process is running."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass(frozen=True)
class Base:
    """Settings that describe the deployment rather than a single component."""

    env: DeploymentEnv = DeploymentEnv.DEVELOPMENT

    @classmethod
    def from_environment(cls, environment: Environment) -> "Base":
        """Production when running on Heroku (``HEROKU`` set), development otherwise."""
        if environment.is_set("HEROKU"):
            return cls(env=DeploymentEnv.PRODUCTION)
        return cls(env=DeploymentEnv.DEVELOPMENT)

    @property
    def is_production(self) -> bool:
        return self.env is DeploymentEnv.PRODUCTION
