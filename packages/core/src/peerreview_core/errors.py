"""Error taxonomy for peer review runs.

Setup failures (Config, IO, Validation) are raised as ReviewError and end the
run before any model is contacted. Network, Timeout and Api failures happen per
model during dispatch; the review client turns them into failed
ModelReviewResult entries instead of letting them escape.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIG = "Config"
    IO = "IO"
    VALIDATION = "Validation"
    NETWORK = "Network"
    TIMEOUT = "Timeout"
    API = "Api"


class ReviewError(Exception):
    """A classified failure carrying its ErrorKind and optional details."""

    def __init__(self, kind: ErrorKind, message: str, details: object | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ReviewError({self.kind.value}, {self.message!r})"
