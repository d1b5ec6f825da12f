"""Loading of executors from entry points."""

from importlib.metadata import entry_points
from typing import Any

from suite_launcher.errors import ExecutorNotFoundError
from suite_launcher.executors.manifest import ExecutorManifest

ENTRY_POINT_GROUP = "suite_launcher.executors"


def available_executors() -> list[str]:
    """List the keys of the installed executor plugins."""
    return sorted(e.name for e in entry_points(group=ENTRY_POINT_GROUP))


def load_executor_manifest(key: str) -> ExecutorManifest[Any]:
    """Load an executor manifest by key.

    Args:
        key: Executor key from the `suite_launcher.executors` entry points
             (e.g., "command", "remote")

    Raises:
        ExecutorNotFoundError: If no executor is registered under the key, or
            its entry point does not export an `ExecutorManifest`

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise ExecutorNotFoundError(
            f"Executor '{key}' not found. "
            f"Available executors: {available_executors()}"
        )

    entry = next(iter(matches))
    manifest = entry.load()
    if not isinstance(manifest, ExecutorManifest):
        raise ExecutorNotFoundError(
            f"Entry point '{key}' ({entry.value}) is not an executor manifest"
        )
    return manifest
