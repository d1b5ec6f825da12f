"""Suites declared in YAML files."""

from collections.abc import Sequence

from pydantic import Field

from suite_launcher.models.base import Model
from suite_launcher.models.environment import EnvironmentConfig
from suite_launcher.models.test_run import TestRunDescriptor
from suite_launcher.suites.base import Suite


class SuiteTestRunEntry(Model):
    """Test run entry of a suite file."""

    __test__ = False

    environment: str = Field(..., description="Name of the environment to run on")
    groups: Sequence[str] = Field(default_factory=list)
    excluded_groups: Sequence[str] = Field(default_factory=list)
    tests: Sequence[str] = Field(default_factory=list)
    excluded_tests: Sequence[str] = Field(default_factory=list)
    configs: Sequence[str] = Field(
        default_factory=list,
        description="Only run on these configs (empty means every config)",
    )
    excluded_configs: Sequence[str] = Field(
        default_factory=list, description="Never run on these configs"
    )

    def applies_to(self, config: EnvironmentConfig) -> bool:
        """Check whether the entry runs on the given config."""
        if self.configs and config.name not in self.configs:
            return False
        return config.name not in self.excluded_configs

    def to_descriptor(self) -> TestRunDescriptor:
        """Convert the entry into a test run descriptor."""
        return TestRunDescriptor(
            environment=self.environment,
            groups=self.groups,
            excluded_groups=self.excluded_groups,
            tests=self.tests,
            excluded_tests=self.excluded_tests,
        )


class SuiteDefinition(Model, Suite):
    """Suite loaded from a `<name>.yaml` file."""

    name: str = Field(..., description="Suite name")
    test_runs: Sequence[SuiteTestRunEntry] = Field(
        default_factory=list, description="Test runs in execution order"
    )

    def get_test_runs(self, config: EnvironmentConfig) -> Sequence[TestRunDescriptor]:
        """Return descriptors of the entries applying to the config, in file order."""
        return [
            entry.to_descriptor()
            for entry in self.test_runs
            if entry.applies_to(config)
        ]
