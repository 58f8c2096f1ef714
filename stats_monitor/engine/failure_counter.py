from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class FailureCounter:
    """Counts back-to-back failed poll cycles.

    ``record_failure`` returns True only on the cycle where the count reaches
    ``threshold``; the count then starts over from zero.
    """

    def __init__(self, threshold: int = 3) -> None:
        if threshold < 1:
            raise ValueError("threshold must be >= 1")
        self.threshold = threshold
        self._count = 0

    def record_success(self) -> None:
        if self._count:
            logger.info("Fetch recovered after %d failed cycle(s)", self._count)
        self._count = 0

    def record_failure(self) -> bool:
        self._count += 1
        if self._count == self.threshold:
            self._count = 0
            return True
        return False

    @property
    def count(self) -> int:
        return self._count
