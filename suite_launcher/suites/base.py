"""Abstract base classes for suites and suite resolution."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from suite_launcher.errors import SuiteNotFoundError
from suite_launcher.models.environment import EnvironmentConfig
from suite_launcher.models.test_run import TestRunDescriptor


class Suite(ABC):
    """Named collection of test runs, parameterized by environment config."""

    @abstractmethod
    def get_test_runs(self, config: EnvironmentConfig) -> Sequence[TestRunDescriptor]:
        """Return the test runs of the suite for the given config.

        The same config always yields the same runs in the same order.
        """


class SuiteResolver(ABC):
    """Maps suite names to suites."""

    @abstractmethod
    def resolve(self, name: str) -> Suite:
        """Return the suite with the given name.

        Raises:
            SuiteNotFoundError: If no suite has that name

        """


@dataclass(frozen=True, kw_only=True)
class MappingSuiteResolver(SuiteResolver):
    """Resolves suites from an in-memory mapping."""

    suites: Mapping[str, Suite] = field(default_factory=dict)

    def resolve(self, name: str) -> Suite:
        """Return the suite registered under the name."""
        try:
            return self.suites[name]
        except KeyError:
            raise SuiteNotFoundError(
                f"Suite '{name}' not found. Available suites: {sorted(self.suites)}"
            ) from None
