"""Suite orchestrator running the test runs of a suite one after another."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from suite_launcher.environments.base import EnvironmentConfigResolver
from suite_launcher.errors import SetupError
from suite_launcher.executors.base import TestRunExecutor, TestRunOptions
from suite_launcher.models.environment import EnvironmentConfig
from suite_launcher.models.result import ResultRecord, RunError
from suite_launcher.models.test_run import TestRunDescriptor
from suite_launcher.reporting import exit_status
from suite_launcher.suites.base import SuiteResolver

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class SuiteExecution:
    """Outcome of a suite execution: one record per test run, in order."""

    suite_name: str
    environment_config: EnvironmentConfig
    results: Sequence[ResultRecord]
    duration: float

    @property
    def verdict(self) -> bool:
        """Whether every test run succeeded (true when there were none)."""
        return all(result.is_successful for result in self.results)

    @property
    def exit_status(self) -> int:
        """Process exit status matching the verdict."""
        return exit_status(self.verdict)


@dataclass(frozen=True, kw_only=True)
class SuiteOrchestrator:
    """Orchestrates the test runs of a suite on a single executor.

    Runs are executed strictly sequentially, in the order the suite returns
    them. A failing run is recorded and never stops the following runs.
    """

    suite_resolver: SuiteResolver
    config_resolver: EnvironmentConfigResolver
    executor: TestRunExecutor
    test_jar: Path
    reports_root: Path = Path("target/reports")
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    async def execute(self, suite_name: str, config_name: str) -> SuiteExecution:
        """Run every test run of the suite on the environment config.

        Args:
            suite_name: Name of the suite to resolve
            config_name: Name of the environment config to resolve

        Returns:
            The suite execution with one result record per test run

        Raises:
            SetupError: If the suite, the config or the suite's test runs
                cannot be resolved; no test run is executed in that case

        """
        suite = self.suite_resolver.resolve(suite_name)
        environment_config = self.config_resolver.resolve(config_name)

        try:
            test_runs = list(suite.get_test_runs(environment_config))
        except SetupError:
            raise
        except Exception as e:
            raise SetupError(
                f"Suite '{suite_name}' failed to produce test runs for config "
                f"'{environment_config.name}': {e}"
            ) from e

        self._log_plan(suite_name, environment_config, test_runs)

        suite_start = self.clock()
        results: list[ResultRecord] = []
        for descriptor in test_runs:
            result = await self._execute_test_run(
                suite_name, descriptor, environment_config
            )
            results.append(result)

        execution = SuiteExecution(
            suite_name=suite_name,
            environment_config=environment_config,
            results=results,
            duration=max(0.0, self.clock() - suite_start),
        )

        if execution.verdict:
            log.info("Suite succeeded in %.2fs", execution.duration)
        else:
            log.error("Suite failed in %.2fs", execution.duration)

        return execution

    def build_options(
        self,
        suite_name: str,
        descriptor: TestRunDescriptor,
        environment_config: EnvironmentConfig,
    ) -> TestRunOptions:
        """Derive executor options for a test run."""
        return TestRunOptions(
            suite_name=suite_name,
            config_name=environment_config.name,
            environment=descriptor.environment,
            runner_arguments=descriptor.to_runner_arguments(environment_config),
            test_jar=self.test_jar,
            reports_dir=self.reports_root
            / suite_name
            / environment_config.name
            / descriptor.environment,
        )

    async def _execute_test_run(
        self,
        suite_name: str,
        descriptor: TestRunDescriptor,
        environment_config: EnvironmentConfig,
    ) -> ResultRecord:
        """Execute one test run, capturing any failure in the result."""
        log.info(
            "Starting test run '%s' with config '%s'",
            descriptor.label,
            environment_config.name,
        )
        start = self.clock()

        failure: RunError | None = None
        try:
            options = self.build_options(suite_name, descriptor, environment_config)
            await self.executor.run(options)
        except Exception as e:
            failure = RunError(cause=e)
            log.error(
                "Failed to execute test run '%s': %s: %s",
                descriptor.label,
                failure.type_name,
                failure.message,
                exc_info=e,
            )

        result = ResultRecord(
            descriptor=descriptor,
            environment_config=environment_config,
            duration=max(0.0, self.clock() - start),
            failure=failure,
        )
        log.info(
            "Test run completed: '%s' status=%s duration=%.1fs",
            descriptor.label,
            "PASSED" if result.is_successful else "FAILED",
            result.duration,
        )
        return result

    @staticmethod
    def _log_plan(
        suite_name: str,
        environment_config: EnvironmentConfig,
        test_runs: Sequence[TestRunDescriptor],
    ) -> None:
        log.info(
            "Starting suite '%s' with config '%s' and %d test run(s):",
            suite_name,
            environment_config.name,
            len(test_runs),
        )
        for descriptor in test_runs:
            log.info(
                " * environment '%s': groups: %s, excluded groups: %s, "
                "tests: %s, excluded tests: %s",
                descriptor.environment,
                list(descriptor.groups),
                list(descriptor.excluded_groups),
                list(descriptor.tests),
                list(descriptor.excluded_tests),
            )
