"""Pydantic models for the test runner service API responses."""

from typing import Literal

from pydantic import BaseModel

type RemoteRunStatus = Literal[
    "queued",
    "running",
    "passed",
    "failed",
    "errored",
    "cancelled",
]


class RemoteRun(BaseModel):
    """A test run from the test runner service API."""

    id: str
    status: RemoteRunStatus
    web_url: str | None = None
    message: str | None = None
