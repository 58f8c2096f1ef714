from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

FETCH_FAILURE_MESSAGE = "Unable to fetch server statistic"


class AlertKind(StrEnum):
    LOAD_AVERAGE = "load_average"
    MEMORY_USAGE = "memory_usage"
    DISK_SPACE = "disk_space"
    NETWORK_BANDWIDTH = "network_bandwidth"
    FETCH_FAILURE = "fetch_failure"


class Alert(BaseModel):
    """A single output line plus the figure it reports."""

    model_config = ConfigDict(frozen=True)

    kind: AlertKind
    message: str
    value: int | None = None

    @classmethod
    def fetch_failure(cls) -> Alert:
        return cls(kind=AlertKind.FETCH_FAILURE, message=FETCH_FAILURE_MESSAGE)

    def __str__(self) -> str:
        return self.message
