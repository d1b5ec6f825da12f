"""Models for test run outcomes."""

from dataclasses import dataclass

from suite_launcher.models.environment import EnvironmentConfig
from suite_launcher.models.test_run import TestRunDescriptor


@dataclass(frozen=True, kw_only=True)
class RunError:
    """Failure raised by the executor for a single test run."""

    cause: Exception

    @property
    def type_name(self) -> str:
        """Class name of the underlying exception."""
        return type(self.cause).__name__

    @property
    def message(self) -> str:
        """Message of the underlying exception."""
        return str(self.cause)


@dataclass(frozen=True, kw_only=True)
class ResultRecord:
    """Outcome of one attempted test run.

    Created once the attempt has completed, whether it succeeded or not.
    """

    descriptor: TestRunDescriptor
    environment_config: EnvironmentConfig
    duration: float
    failure: RunError | None = None

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"duration must not be negative, got {self.duration}")

    @property
    def is_successful(self) -> bool:
        """Whether the run completed without a failure."""
        return self.failure is None

    @property
    def has_failed(self) -> bool:
        """Whether the run recorded a failure."""
        return self.failure is not None
