"""Configuration for the local command executor."""

from collections.abc import Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, Field


class CommandExecutorConfig(BaseModel):
    """Configuration for the local command executor."""

    command: Sequence[str] = Field(
        default=("presto-product-tests-launcher/bin/run-launcher", "test", "run"),
        min_length=1,
        description="Command and leading arguments of the test run launcher",
    )
    working_dir: Path | None = None
    env: Mapping[str, str] = Field(
        default_factory=dict, description="Extra environment variables"
    )
    # Seconds, None waits forever
    timeout: float | None = None
    # Lines of launcher output quoted in the failure message
    output_tail_lines: int = 20
    # Bytes, longest launcher output line accepted
    output_line_limit: int = Field(default=1024 * 1024, gt=0)
