"""Executor dispatching test runs to a remote test runner service."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from suite_launcher.executors.base import (
    TestRunExecutor,
    TestRunFailedError,
    TestRunOptions,
)
from suite_launcher.executors.remote.config import RemoteExecutorConfig
from suite_launcher.executors.remote.models import RemoteRun, RemoteRunStatus

log = logging.getLogger(__name__)

COMPLETED_STATUSES: frozenset[RemoteRunStatus] = frozenset(
    ["passed", "failed", "errored", "cancelled"]
)


@dataclass(frozen=True, kw_only=True)
class RemoteExecutor(TestRunExecutor):
    """Test runner service executor.

    A run is dispatched with `POST runs`, then `GET runs/{id}` is polled until
    the run reaches a completed status.
    """

    config: RemoteExecutorConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: RemoteExecutorConfig
    ) -> AsyncGenerator["RemoteExecutor", None]:
        """Create executor with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Accept": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def run(self, options: TestRunOptions) -> None:
        """Dispatch the run and wait until it completes."""
        run_id = await self.dispatch(options)
        run = await self.wait_for_completion(run_id)

        if run.status != "passed":
            details = f": {run.message}" if run.message else ""
            raise TestRunFailedError(
                f"Remote run {run.id} on environment '{options.environment}' "
                f"finished with status={run.status} ({run.web_url}){details}"
            )

    async def dispatch(self, options: TestRunOptions) -> str:
        """Create a run on the service and return its ID."""
        payload = {
            "suite": options.suite_name,
            "config": options.config_name,
            "environment": options.environment,
            "arguments": list(options.runner_arguments),
            "test_jar": str(options.test_jar),
            "reports_dir": str(options.reports_dir),
        }

        async with self.session.post("runs", json=payload) as response:
            if response.status != 201:
                text = await response.text()
                raise RuntimeError(f"Failed to create run: {response.status} {text}")
            data = await response.json()

        run_id = data.get("id")
        if not isinstance(run_id, str):
            raise RuntimeError("Run ID not found in response")

        log.info(
            "Created remote run %s for environment %s", run_id, options.environment
        )
        return run_id

    async def poll_status(self, run_id: str) -> RemoteRun | None:
        """Return the run if it is complete, None while it is still running."""
        run = await self.get_run(run_id)

        if run.status not in COMPLETED_STATUSES:
            log.info("Remote run %s still in status=%s", run.id, run.status)
            return None

        return run

    async def wait_for_completion(self, run_id: str) -> RemoteRun:
        """Poll the run until it completes.

        Raises:
            TimeoutError: If the run does not complete within the timeout

        """
        timeout = self.config.timeout
        deadline = asyncio.get_running_loop().time() + timeout

        while True:
            if (run := await self.poll_status(run_id)) is not None:
                return run

            if asyncio.get_running_loop().time() >= deadline:
                raise TimeoutError(
                    f"Remote run {run_id} did not complete within {timeout} seconds"
                )

            await asyncio.sleep(self.config.poll_interval)

    async def get_run(self, run_id: str) -> RemoteRun:
        """Get run by ID."""
        async with self.session.get(f"runs/{run_id}") as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(f"Failed to get run: {response.status} {text}")
            data = await response.json()

        return RemoteRun.model_validate(data)
