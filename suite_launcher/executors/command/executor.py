"""Executor running each test run as a local command."""

import asyncio
import logging
import os
import shlex
from collections import deque
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass

from suite_launcher.executors.base import (
    TestRunExecutor,
    TestRunFailedError,
    TestRunOptions,
)
from suite_launcher.executors.command.config import CommandExecutorConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class CommandExecutor(TestRunExecutor):
    """Runs the configured launcher command once per test run.

    The launcher output (stdout and stderr merged) is forwarded to the log,
    the last lines are kept to explain a failure.
    """

    config: CommandExecutorConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: CommandExecutorConfig
    ) -> AsyncGenerator["CommandExecutor", None]:
        """Create executor from its configuration."""
        yield cls(config=config)

    def build_command(self, options: TestRunOptions) -> Sequence[str]:
        """Build the full command line for a test run."""
        command = [
            *self.config.command,
            "--environment",
            options.environment,
            "--config",
            options.config_name,
            "--test-jar",
            str(options.test_jar),
            "--reports-dir",
            str(options.reports_dir),
        ]
        if options.runner_arguments:
            command.extend(["--", *options.runner_arguments])
        return command

    async def run(self, options: TestRunOptions) -> None:
        """Run the command and wait for it to exit."""
        command = self.build_command(options)
        log.info("Execute this test run using:\n%s", shlex.join(command))

        env = {**os.environ, **self.config.env} if self.config.env else None
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=self.config.working_dir,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            limit=self.config.output_line_limit,
        )

        tail: deque[str] = deque(maxlen=self.config.output_tail_lines)
        try:
            await asyncio.wait_for(
                self._forward_output(process, options.environment, tail),
                timeout=self.config.timeout,
            )
        except TimeoutError:
            raise TimeoutError(
                f"Test run on environment '{options.environment}' did not complete "
                f"within {self.config.timeout} seconds"
            ) from None
        finally:
            # The next test run must not start while this launcher still runs
            if process.returncode is None:
                process.kill()
                await process.wait()

        if process.returncode != 0:
            output = "\n".join(tail)
            raise TestRunFailedError(
                f"Test run on environment '{options.environment}' exited with "
                f"code {process.returncode}: {output}"
            )

    async def _forward_output(
        self,
        process: asyncio.subprocess.Process,
        environment: str,
        tail: deque[str],
    ) -> None:
        """Log output lines until the process exits."""
        if process.stdout is None:
            raise RuntimeError("Launcher output is not captured")
        async for raw_line in process.stdout:
            line = raw_line.decode(errors="replace").rstrip()
            tail.append(line)
            log.info("[%s] %s", environment, line)
        await process.wait()
