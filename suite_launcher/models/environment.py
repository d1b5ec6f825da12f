"""Model for the environment configuration a suite runs against."""

from collections.abc import Mapping, Sequence

from pydantic import Field

from suite_launcher.models.base import Model


class EnvironmentConfig(Model):
    """Named configuration of the target execution environment."""

    name: str = Field(..., description="Config name (e.g. 'config-default')")
    excluded_groups: Sequence[str] = Field(
        default_factory=list,
        description="Test groups excluded from every run on this config",
    )
    excluded_tests: Sequence[str] = Field(
        default_factory=list,
        description="Tests excluded from every run on this config",
    )
    properties: Mapping[str, str] = Field(
        default_factory=dict,
        description="Free-form settings passed through to executors",
    )
