"""Configuration for the remote test runner executor."""

from pydantic import BaseModel, SecretStr


class RemoteExecutorConfig(BaseModel):
    """Configuration for a test runner service reachable over HTTP."""

    api_base_url: str
    token: SecretStr
    # Seconds to wait for one run before giving up
    timeout: float = 7200
    poll_interval: float = 30
