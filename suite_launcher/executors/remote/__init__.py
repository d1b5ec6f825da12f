"""Remote test runner executor module."""

from suite_launcher.executors.remote.config import RemoteExecutorConfig
from suite_launcher.executors.remote.executor import RemoteExecutor
from suite_launcher.executors.remote.manifest import remote_manifest

__all__ = ["RemoteExecutor", "RemoteExecutorConfig", "remote_manifest"]
