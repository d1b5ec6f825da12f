"""Abstract base class for test run executors."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class TestRunOptions:
    """Everything an executor needs to run one test run."""

    __test__ = False

    suite_name: str
    config_name: str
    environment: str
    runner_arguments: Sequence[str]
    test_jar: Path
    reports_dir: Path


class TestRunFailedError(Exception):
    """Raised when a test run completed with a failing outcome."""

    __test__ = False


class TestRunExecutor(ABC):
    """Runs a single test run to completion.

    Implementations block until the run is finished, return normally when it
    passed and raise for any failure, including setup and timeout failures
    of that single run.
    """

    __test__ = False

    @abstractmethod
    async def run(self, options: TestRunOptions) -> None:
        """Execute the test run described by the options.

        Raises:
            TestRunFailedError: If the run completed but did not pass
            TimeoutError: If the run did not complete in time

        """
