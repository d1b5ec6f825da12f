"""Abstract base class for environment config resolution."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field

from suite_launcher.errors import EnvironmentConfigNotFoundError
from suite_launcher.models.environment import EnvironmentConfig


class EnvironmentConfigResolver(ABC):
    """Maps config names to environment configs."""

    @abstractmethod
    def resolve(self, name: str) -> EnvironmentConfig:
        """Return the environment config with the given name.

        Raises:
            EnvironmentConfigNotFoundError: If no config has that name

        """


@dataclass(frozen=True, kw_only=True)
class MappingEnvironmentConfigResolver(EnvironmentConfigResolver):
    """Resolves environment configs from an in-memory mapping."""

    configs: Mapping[str, EnvironmentConfig] = field(default_factory=dict)

    def resolve(self, name: str) -> EnvironmentConfig:
        """Return the config registered under the name."""
        try:
            return self.configs[name]
        except KeyError:
            raise EnvironmentConfigNotFoundError(
                f"Environment config '{name}' not found. "
                f"Available configs: {sorted(self.configs)}"
            ) from None
