"""Command executor module."""

from suite_launcher.executors.command.config import CommandExecutorConfig
from suite_launcher.executors.command.executor import CommandExecutor
from suite_launcher.executors.command.manifest import command_manifest

__all__ = ["CommandExecutor", "CommandExecutorConfig", "command_manifest"]
