"""Resolution of environment configs from a directory of YAML files."""

import logging
from dataclasses import dataclass
from pathlib import Path

from suite_launcher.definition_loader import list_definitions, load_definition
from suite_launcher.environments.base import EnvironmentConfigResolver
from suite_launcher.errors import EnvironmentConfigNotFoundError
from suite_launcher.models.environment import EnvironmentConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class YamlEnvironmentConfigResolver(EnvironmentConfigResolver):
    """Resolves config `<name>` from `<configs_dir>/<name>.yaml`."""

    configs_dir: Path

    def resolve(self, name: str) -> EnvironmentConfig:
        """Load and validate the config file for the name."""
        path = self.configs_dir / f"{name}.yaml"
        log.info("Loading environment config '%s' from %s", name, path)

        try:
            return load_definition(path, EnvironmentConfig, name=name)
        except FileNotFoundError:
            available = list_definitions(self.configs_dir)
            raise EnvironmentConfigNotFoundError(
                f"Environment config '{name}' not found in {self.configs_dir}. "
                f"Available configs: {available}"
            ) from None
