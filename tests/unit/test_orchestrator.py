"""Tests for suite orchestrator."""

import asyncio
import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import Mock

import pytest

from suite_launcher.environments.base import MappingEnvironmentConfigResolver
from suite_launcher.errors import (
    EnvironmentConfigNotFoundError,
    SetupError,
    SuiteNotFoundError,
)
from suite_launcher.executors.base import (
    TestRunExecutor,
    TestRunFailedError,
    TestRunOptions,
)
from suite_launcher.models.environment import EnvironmentConfig
from suite_launcher.models.test_run import TestRunDescriptor
from suite_launcher.orchestrator import SuiteOrchestrator
from suite_launcher.suites.base import MappingSuiteResolver, Suite
from suite_launcher.testing.factories import (
    EnvironmentConfigFactory,
    TestRunDescriptorFactory,
)

MULTINODE = TestRunDescriptor(environment="multinode", groups=["smoke"])
KERBEROS = TestRunDescriptor(
    environment="singlenode-kerberos", groups=["hdfs"], excluded_tests=["TestA.b"]
)


@dataclass(frozen=True, kw_only=True)
class StaticSuite(Suite):
    """Suite returning the same test runs for every config."""

    test_runs: Sequence[TestRunDescriptor] = field(default_factory=list)

    def get_test_runs(self, config: EnvironmentConfig) -> Sequence[TestRunDescriptor]:
        """Return the configured test runs."""
        return self.test_runs


class BrokenSuite(Suite):
    """Suite that cannot compute its test runs."""

    def get_test_runs(self, config: EnvironmentConfig) -> Sequence[TestRunDescriptor]:
        """Raise an error."""
        raise ValueError("unsupported config")


@pytest.fixture
def environment_config() -> EnvironmentConfig:
    """Create the default environment config."""
    return EnvironmentConfigFactory.build(
        name="config-default", excluded_groups=["quarantine"]
    )


@pytest.fixture
def executor_mock() -> Mock:
    """Create mock executor."""
    return Mock(spec=TestRunExecutor)


@pytest.fixture
def orchestrator(
    executor_mock: Mock, environment_config: EnvironmentConfig
) -> SuiteOrchestrator:
    """Create orchestrator with in-memory suites and a mock executor."""
    return SuiteOrchestrator(
        suite_resolver=MappingSuiteResolver(
            suites={
                "smoke": StaticSuite(test_runs=[MULTINODE, KERBEROS]),
                "empty": StaticSuite(),
                "broken": BrokenSuite(),
            }
        ),
        config_resolver=MappingEnvironmentConfigResolver(
            configs={"config-default": environment_config}
        ),
        executor=executor_mock,
        test_jar=Path("tests.jar"),
        reports_root=Path("reports"),
        clock=itertools.count(0.0, 0.5).__next__,
    )


async def test_all_runs_succeed(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Records one passed result per test run when every run succeeds."""
    execution = await orchestrator.execute("smoke", "config-default")

    assert [r.descriptor for r in execution.results] == [MULTINODE, KERBEROS]
    assert all(r.is_successful for r in execution.results)
    assert execution.verdict is True
    assert execution.exit_status == 0
    assert executor_mock.run.await_count == 2


async def test_failure_does_not_stop_following_runs(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Records a failed first run and still executes the second one."""
    cause = TestRunFailedError("exit code 1")
    executor_mock.run.side_effect = [cause, None]

    execution = await orchestrator.execute("smoke", "config-default")

    assert len(execution.results) == 2
    first, second = execution.results
    assert first.descriptor == MULTINODE
    assert first.has_failed
    assert first.failure is not None
    assert first.failure.cause is cause
    assert second.descriptor == KERBEROS
    assert second.is_successful
    assert execution.verdict is False
    assert execution.exit_status == 1
    assert executor_mock.run.await_count == 2


async def test_failure_of_last_run_fails_suite(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Fails the suite when only the last run fails."""
    executor_mock.run.side_effect = [None, TimeoutError("too slow")]

    execution = await orchestrator.execute("smoke", "config-default")

    assert [r.is_successful for r in execution.results] == [True, False]
    assert execution.verdict is False


async def test_every_run_failing_is_recorded(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Records every failure when all runs fail."""
    executor_mock.run.side_effect = RuntimeError("boom")

    execution = await orchestrator.execute("smoke", "config-default")

    assert [r.has_failed for r in execution.results] == [True, True]
    assert {r.failure.message for r in execution.results if r.failure} == {"boom"}


async def test_empty_suite_succeeds(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Treats a suite without test runs as successful."""
    execution = await orchestrator.execute("empty", "config-default")

    assert execution.results == []
    assert execution.verdict is True
    assert execution.exit_status == 0
    executor_mock.run.assert_not_called()


async def test_unknown_suite_raises_setup_error(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Raises SuiteNotFoundError before any run is executed."""
    with pytest.raises(SuiteNotFoundError, match="unknown"):
        await orchestrator.execute("unknown", "config-default")

    executor_mock.run.assert_not_called()


async def test_unknown_config_raises_setup_error(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Raises EnvironmentConfigNotFoundError before any run is executed."""
    with pytest.raises(EnvironmentConfigNotFoundError, match="config-missing"):
        await orchestrator.execute("smoke", "config-missing")

    executor_mock.run.assert_not_called()


async def test_suite_failing_to_produce_runs_raises_setup_error(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Wraps errors raised while computing test runs in SetupError."""
    with pytest.raises(SetupError, match="unsupported config") as exc_info:
        await orchestrator.execute("broken", "config-default")

    assert isinstance(exc_info.value.__cause__, ValueError)
    executor_mock.run.assert_not_called()


async def test_passes_options_derived_from_descriptor(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Builds executor options from the descriptor and the config."""
    await orchestrator.execute("smoke", "config-default")

    first_options, second_options = (
        call.args[0] for call in executor_mock.run.await_args_list
    )
    assert first_options == TestRunOptions(
        suite_name="smoke",
        config_name="config-default",
        environment="multinode",
        runner_arguments=["-g", "smoke", "-x", "quarantine"],
        test_jar=Path("tests.jar"),
        reports_dir=Path("reports/smoke/config-default/multinode"),
    )
    assert second_options.environment == "singlenode-kerberos"
    assert second_options.runner_arguments == [
        "-g",
        "hdfs",
        "-x",
        "quarantine",
        "-e",
        "TestA.b",
    ]


async def test_runs_are_executed_sequentially_in_order(
    executor_mock: Mock, environment_config: EnvironmentConfig
) -> None:
    """Starts a run only after the previous one completed."""
    descriptors = [
        TestRunDescriptorFactory.build(environment=f"env-{i}") for i in range(5)
    ]
    events: list[str] = []

    async def run(options: TestRunOptions) -> None:
        events.append(f"start {options.environment}")
        if options.environment == "env-2":
            events.append(f"fail {options.environment}")
            raise RuntimeError("env-2 broke")
        events.append(f"end {options.environment}")

    executor_mock.run.side_effect = run
    orchestrator = SuiteOrchestrator(
        suite_resolver=MappingSuiteResolver(
            suites={"many": StaticSuite(test_runs=descriptors)}
        ),
        config_resolver=MappingEnvironmentConfigResolver(
            configs={"config-default": environment_config}
        ),
        executor=executor_mock,
        test_jar=Path("tests.jar"),
    )

    execution = await orchestrator.execute("many", "config-default")

    assert [r.descriptor for r in execution.results] == descriptors
    assert [r.has_failed for r in execution.results] == [
        False,
        False,
        True,
        False,
        False,
    ]
    assert events == [
        "start env-0",
        "end env-0",
        "start env-1",
        "end env-1",
        "start env-2",
        "fail env-2",
        "start env-3",
        "end env-3",
        "start env-4",
        "end env-4",
    ]


async def test_records_monotonic_durations(
    orchestrator: SuiteOrchestrator,
) -> None:
    """Measures each run and the whole suite with the clock."""
    execution = await orchestrator.execute("smoke", "config-default")

    assert [r.duration for r in execution.results] == [0.5, 0.5]
    assert execution.duration == 2.5


async def test_durations_are_never_negative(
    executor_mock: Mock, environment_config: EnvironmentConfig
) -> None:
    """Clamps durations when the clock goes backwards."""
    orchestrator = SuiteOrchestrator(
        suite_resolver=MappingSuiteResolver(
            suites={"smoke": StaticSuite(test_runs=[MULTINODE])}
        ),
        config_resolver=MappingEnvironmentConfigResolver(
            configs={"config-default": environment_config}
        ),
        executor=executor_mock,
        test_jar=Path("tests.jar"),
        clock=itertools.count(10.0, -1.0).__next__,
    )

    execution = await orchestrator.execute("smoke", "config-default")

    assert execution.results[0].duration == 0.0
    assert execution.duration == 0.0


async def test_keeps_environment_config_on_results(
    orchestrator: SuiteOrchestrator, environment_config: EnvironmentConfig
) -> None:
    """Stores the resolved config on the execution and every result."""
    execution = await orchestrator.execute("smoke", "config-default")

    assert execution.environment_config == environment_config
    assert all(r.environment_config == environment_config for r in execution.results)


async def test_cancellation_is_not_recorded_as_failure(
    orchestrator: SuiteOrchestrator, executor_mock: Mock
) -> None:
    """Lets exceptions outside the Exception hierarchy propagate."""
    executor_mock.run.side_effect = asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await orchestrator.execute("smoke", "config-default")


async def test_logs_plan_and_run_status(
    orchestrator: SuiteOrchestrator,
    executor_mock: Mock,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Logs the plan before running and a status line per run."""
    executor_mock.run.side_effect = [RuntimeError("API Error"), None]

    with caplog.at_level(logging.INFO):
        await orchestrator.execute("smoke", "config-default")

    assert "Starting suite 'smoke' with config 'config-default'" in caplog.text
    assert (
        " * environment 'multinode': groups: ['smoke'], excluded groups: [], "
        "tests: [], excluded tests: []"
    ) in caplog.text
    assert (
        "Failed to execute test run 'multinode groups=smoke': "
        "RuntimeError: API Error"
    ) in caplog.text
    assert "'multinode groups=smoke' status=FAILED" in caplog.text
    assert "status=PASSED" in caplog.text
    assert "Suite failed in" in caplog.text
