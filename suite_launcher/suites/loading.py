"""Resolution of suites from a directory of YAML files."""

import logging
from dataclasses import dataclass
from pathlib import Path

from suite_launcher.definition_loader import list_definitions, load_definition
from suite_launcher.errors import SuiteNotFoundError
from suite_launcher.suites.base import SuiteResolver
from suite_launcher.suites.definition import SuiteDefinition

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class YamlSuiteResolver(SuiteResolver):
    """Resolves suite `<name>` from `<suites_dir>/<name>.yaml`."""

    suites_dir: Path

    def resolve(self, name: str) -> SuiteDefinition:
        """Load and validate the suite file for the name."""
        path = self.suites_dir / f"{name}.yaml"
        log.info("Loading suite '%s' from %s", name, path)

        try:
            return load_definition(path, SuiteDefinition, name=name)
        except FileNotFoundError:
            available = list_definitions(self.suites_dir)
            raise SuiteNotFoundError(
                f"Suite '{name}' not found in {self.suites_dir}. "
                f"Available suites: {available}"
            ) from None
