from __future__ import annotations

import asyncio
import logging
from typing import Callable

from stats_monitor.collectors.stats_fetcher import StatsFetcher
from stats_monitor.config import MonitorConfig
from stats_monitor.engine import FailureCounter, ThresholdEvaluator, parse_stats
from stats_monitor.exceptions import StatsMonitorError
from stats_monitor.models import Alert

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]


class Poller:
    """Drives the fetch → parse → evaluate cycle on a fixed interval.

    Owns the only cross-cycle state, a ``FailureCounter``. Every failure
    cause (transport, status, read, parse) counts the same; after
    ``max_consecutive_errors`` back-to-back failures a single
    "Unable to fetch server statistic" line is emitted.

    Alert lines go to ``output`` (``print`` by default); diagnostics go to
    the module logger.
    """

    def __init__(
        self,
        config: MonitorConfig,
        fetcher: StatsFetcher | None = None,
        output: OutputSink = print,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or StatsFetcher(config.url, timeout=config.fetch_timeout)
        self.evaluator = ThresholdEvaluator(config.thresholds)
        self.failures = FailureCounter(config.max_consecutive_errors)
        self._output = output
        self._running = False
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        """Run the loop as a background task."""
        if self._running:
            return
        self._running = True
        self._stop_event.clear()
        self._task = asyncio.create_task(self._loop())
        logger.info(
            "Poller started (url=%s, interval=%.1fs)",
            self.config.url,
            self.config.poll_interval,
        )

    async def stop(self) -> None:
        """Stop the loop, whether it came from ``start`` or ``run_forever``.

        The pending sleep is cut short and the HTTP client is closed at once.
        """
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self.fetcher.aclose()
        logger.info("Poller stopped")

    async def run_forever(self) -> None:
        """Run cycles in the current task until ``stop`` or cancellation."""
        if self._running:
            raise RuntimeError("Poller is already running")
        self._running = True
        self._stop_event.clear()
        try:
            await self._loop()
        finally:
            self._running = False
            await self.fetcher.aclose()

    # ── one cycle ───────────────────────────────────────

    async def run_cycle(self) -> list[Alert]:
        """Fetch, parse and evaluate once; emit and return the alerts."""
        try:
            raw = await self.fetcher.fetch()
            snapshot = parse_stats(raw)
        except StatsMonitorError as exc:
            logger.warning("Poll cycle failed (%d in a row): %s", self.failures.count + 1, exc)
            alerts = [Alert.fetch_failure()] if self.failures.record_failure() else []
        else:
            self.failures.record_success()
            alerts = self.evaluator.evaluate(snapshot)

        for alert in alerts:
            self._output(alert.message)
        return alerts

    # ── internals ───────────────────────────────────────

    async def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Unexpected error during poll cycle")
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.config.poll_interval)
            except asyncio.TimeoutError:
                continue

    @property
    def running(self) -> bool:
        return self._running
