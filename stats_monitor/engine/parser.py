from __future__ import annotations

import math

from stats_monitor.exceptions import FieldCountMismatchError, InvalidNumberError
from stats_monitor.models import FIELD_ORDER, MetricsSnapshot

# Integer fields are signed 64-bit on the wire.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_stats(raw: str) -> MetricsSnapshot:
    """Parse a ``/_stats`` payload into a snapshot.

    The payload is seven comma-separated numbers in ``FIELD_ORDER``: a
    decimal load average followed by six base-10 signed 64-bit integers.
    Parsing stops at the first bad field and never returns a partial
    snapshot.

    The load average must be finite. ``nan`` and ``inf`` are rejected even
    though the server's reference client parsed them as floats, so such a
    payload counts as a failed cycle rather than a successful one.

    Raises:
        FieldCountMismatchError: payload does not split into seven fields.
        InvalidNumberError: a field is not a number of the expected kind, or
            an integer field falls outside the 64-bit range.
    """
    parts = raw.strip().split(",")
    if len(parts) != len(FIELD_ORDER):
        raise FieldCountMismatchError(expected=len(FIELD_ORDER), actual=len(parts))

    values: dict[str, float | int] = {"load_average": _parse_float(0, parts[0])}
    for index, name in enumerate(FIELD_ORDER[1:], start=1):
        values[name] = _parse_int(index, parts[index])
    return MetricsSnapshot(**values)


def _check_token(index: int, token: str) -> None:
    # float()/int() tolerate padding and digit separators; the wire format has neither.
    if not token or token != token.strip() or "_" in token:
        raise InvalidNumberError(index, token)


def _parse_float(index: int, token: str) -> float:
    _check_token(index, token)
    try:
        value = float(token)
    except ValueError:
        raise InvalidNumberError(index, token) from None
    if not math.isfinite(value):
        raise InvalidNumberError(index, token)
    return value


def _parse_int(index: int, token: str) -> int:
    _check_token(index, token)
    try:
        value = int(token, 10)
    except ValueError:
        raise InvalidNumberError(index, token) from None
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidNumberError(index, token)
    return value
