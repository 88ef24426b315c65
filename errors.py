"""
errors.py — Failure taxonomy
=============================
Every failure the race can report is a RaceError.  None of them is fatal:
the command that hit one is aborted and the session keeps its last good
state.

    RaceError
    ├── NoGridError          start() before any maze was generated
    └── TransportFailure     provider unreachable / HTTP error / bad JSON
        ├── PayloadError     JSON decoded but is not GridModel / ResultSummary shaped
        └── IncompletePair   only one of the two solver calls succeeded

Degenerate results (empty visited or path lists) are NOT errors — the
tracer handles them as edge cases.
"""

from typing import Optional


class RaceError(Exception):
    """Base class for everything a race command can fail with."""


class NoGridError(RaceError):
    def __init__(self, message: str = "Generate maze first"):
        super().__init__(message)


class TransportFailure(RaceError):
    """A provider could not be reached or answered with something unusable."""


class PayloadError(TransportFailure):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"malformed payload field {field!r}: {reason}")


class IncompletePair(TransportFailure):
    """
    One solver answered, the other did not.  Treated exactly like a total
    failure; `failed` names the competitor whose call broke.
    """

    def __init__(self, failed, cause: Optional[BaseException] = None):
        self.failed = failed
        self.cause = cause
        label = getattr(failed, "value", failed)
        super().__init__(f"solver call for {label} failed: {cause}")
