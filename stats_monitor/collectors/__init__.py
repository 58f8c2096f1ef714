from .poller import Poller
from .stats_fetcher import StatsFetcher

__all__ = [
    "Poller",
    "StatsFetcher",
]
