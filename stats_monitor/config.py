from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Thresholds(BaseModel):
    """Alert thresholds. Ratios are compared with a strict ``>``."""

    model_config = ConfigDict(frozen=True)

    load_average: float = 30.0
    memory_ratio: float = 0.80
    disk_ratio: float = 0.90
    network_ratio: float = 0.90


class MonitorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # --- endpoint ---
    url: str = "http://srv.msk01.gigacorp.local/_stats"
    fetch_timeout: float = 5.0  # seconds per GET, connect + read

    # --- loop ---
    poll_interval: float = 3.0  # seconds slept after every cycle
    max_consecutive_errors: int = Field(default=3, ge=1)

    # --- evaluation ---
    thresholds: Thresholds = Field(default_factory=Thresholds)


settings = MonitorConfig()
