"""Errors raised while setting up a suite execution."""


class SetupError(Exception):
    """Raised when a suite execution cannot start.

    Nothing has been executed when this is raised, so there are no results
    to report.
    """


class SuiteNotFoundError(SetupError):
    """Raised when a suite name cannot be resolved."""


class EnvironmentConfigNotFoundError(SetupError):
    """Raised when an environment config name cannot be resolved."""


class InvalidDefinitionError(SetupError):
    """Raised when a definition file cannot be parsed or validated."""


class ExecutorNotFoundError(SetupError):
    """Raised when an executor plugin is not found."""
