from __future__ import annotations


class StatsMonitorError(Exception):
    """Base class for every failure that counts against a poll cycle."""


# ── fetch ────────────────────────────────────────────


class FetchError(StatsMonitorError):
    pass


class TransportError(FetchError):
    """The request never produced a usable response."""


class UnexpectedStatusError(TransportError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected status code: {status_code}")
        self.status_code = status_code


class ReadError(FetchError):
    """The response body could not be read to the end."""


# ── parse ────────────────────────────────────────────


class ParseError(StatsMonitorError):
    pass


class FieldCountMismatchError(ParseError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"invalid data format: expected {expected} values, got {actual}")
        self.expected = expected
        self.actual = actual


class InvalidNumberError(ParseError):
    def __init__(self, field_index: int, raw_value: str) -> None:
        super().__init__(f"field {field_index}: invalid number {raw_value!r}")
        self.field_index = field_index
        self.raw_value = raw_value
