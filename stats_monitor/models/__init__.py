from .alert import Alert, AlertKind, FETCH_FAILURE_MESSAGE
from .snapshot import MetricsSnapshot, FIELD_ORDER

__all__ = [
    "Alert",
    "AlertKind",
    "FETCH_FAILURE_MESSAGE",
    "MetricsSnapshot",
    "FIELD_ORDER",
]
