"""Remote executor manifest."""

from suite_launcher.executors.manifest import ExecutorManifest
from suite_launcher.executors.remote.config import RemoteExecutorConfig
from suite_launcher.executors.remote.executor import RemoteExecutor

remote_manifest = ExecutorManifest(
    config_cls=RemoteExecutorConfig,
    executor_factory=RemoteExecutor.from_config,
)
