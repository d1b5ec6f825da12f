"""Command executor manifest."""

from suite_launcher.executors.command.config import CommandExecutorConfig
from suite_launcher.executors.command.executor import CommandExecutor
from suite_launcher.executors.manifest import ExecutorManifest

command_manifest = ExecutorManifest(
    config_cls=CommandExecutorConfig,
    executor_factory=CommandExecutor.from_config,
)
