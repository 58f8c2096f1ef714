from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Positional layout of the /_stats payload.
FIELD_ORDER: tuple[str, ...] = (
    "load_average",
    "total_memory",
    "used_memory",
    "total_disk",
    "used_disk",
    "total_network",
    "current_network",
)


class MetricsSnapshot(BaseModel):
    """One parsed set of server metrics from a single poll cycle.

    Memory and disk are in bytes, network in bytes/sec. Values are not
    range-checked; the evaluator guards its own divisions.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    load_average: float
    total_memory: int
    used_memory: int
    total_disk: int
    used_disk: int
    total_network: int
    current_network: int
