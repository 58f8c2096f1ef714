from __future__ import annotations

import logging

from stats_monitor.config import Thresholds
from stats_monitor.models import Alert, AlertKind, MetricsSnapshot

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024
BITS_PER_MBIT = 1_000_000


class ThresholdEvaluator:
    """Turns a snapshot into zero to four alerts.

    Checks run in a fixed order (load, memory, disk, network) and are
    independent of each other. A ratio with a zero total is skipped.
    Load average is rounded for display; percentages and remaining capacity
    are truncated.
    """

    def __init__(self, thresholds: Thresholds | None = None) -> None:
        self.thresholds = thresholds or Thresholds()

    def evaluate(self, snapshot: MetricsSnapshot) -> list[Alert]:
        alerts: list[Alert] = []
        for check in (
            self._check_load_average,
            self._check_memory,
            self._check_disk,
            self._check_network,
        ):
            alert = check(snapshot)
            if alert is not None:
                alerts.append(alert)
        if alerts:
            logger.debug("Snapshot raised %d alert(s)", len(alerts))
        return alerts

    # ── checks ──────────────────────────────────────────

    def _check_load_average(self, snapshot: MetricsSnapshot) -> Alert | None:
        if snapshot.load_average <= self.thresholds.load_average:
            return None
        value = round(snapshot.load_average)
        return Alert(
            kind=AlertKind.LOAD_AVERAGE,
            value=value,
            message=f"Load Average is too high: {value}",
        )

    def _check_memory(self, snapshot: MetricsSnapshot) -> Alert | None:
        ratio = _usage_ratio(snapshot.used_memory, snapshot.total_memory)
        if ratio is None or ratio <= self.thresholds.memory_ratio:
            return None
        value = int(ratio * 100)
        return Alert(
            kind=AlertKind.MEMORY_USAGE,
            value=value,
            message=f"Memory usage too high: {value}%",
        )

    def _check_disk(self, snapshot: MetricsSnapshot) -> Alert | None:
        ratio = _usage_ratio(snapshot.used_disk, snapshot.total_disk)
        if ratio is None or ratio <= self.thresholds.disk_ratio:
            return None
        value = int((snapshot.total_disk - snapshot.used_disk) / BYTES_PER_MB)
        return Alert(
            kind=AlertKind.DISK_SPACE,
            value=value,
            message=f"Free disk space is too low: {value} Mb left",
        )

    def _check_network(self, snapshot: MetricsSnapshot) -> Alert | None:
        ratio = _usage_ratio(snapshot.current_network, snapshot.total_network)
        if ratio is None or ratio <= self.thresholds.network_ratio:
            return None
        value = int((snapshot.total_network - snapshot.current_network) / BITS_PER_MBIT)
        return Alert(
            kind=AlertKind.NETWORK_BANDWIDTH,
            value=value,
            message=f"Network bandwidth usage high: {value} Mbit/s available",
        )


def _usage_ratio(used: int, total: int) -> float | None:
    if total <= 0:
        return None
    return used / total
