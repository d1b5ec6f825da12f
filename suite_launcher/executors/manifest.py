"""Executor manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from suite_launcher.errors import SetupError
from suite_launcher.executors.base import TestRunExecutor


@dataclass(frozen=True, kw_only=True)
class ExecutorManifest[ConfigT: BaseModel]:
    """Executor plugin: its configuration class and executor factory.

    The factory is an async context manager so that the executor can own
    resources (HTTP sessions) for the duration of a whole suite.
    """

    config_cls: type[ConfigT]
    executor_factory: Callable[
        [ConfigT], AbstractAsyncContextManager[TestRunExecutor]
    ]

    def parse_config(self, config_json: str) -> ConfigT:
        """Validate the executor configuration given as a JSON object.

        Raises:
            SetupError: If the document is not JSON or does not match the
                configuration class

        """
        try:
            return self.config_cls.model_validate_json(config_json)
        except ValidationError as e:
            raise SetupError(f"Invalid executor configuration: {e}") from e
