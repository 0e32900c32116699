"""Data model shared by the locator, the review client and the orchestrator.

Nothing here is persisted: every object is built, used and discarded within a
single command execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ReviewFile:
    """One discovered input file, read once at discovery time."""

    path: str  # absolute
    display_name: str
    language: str  # code-fence tag, presentation only
    content: str


@dataclass
class ReviewJob:
    """The composite document sent to every model of a review type."""

    files: list[ReviewFile]
    review_type: str
    display_name: str
    combined_content: str


@dataclass(frozen=True)
class ModelConfig:
    id: str
    display_name: str
    description: str
    strengths: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReviewTypeConfig:
    models: tuple[str, ...]
    focus_areas: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ModelReviewResult:
    """Outcome of one backend call.

    ``content`` is set only when ``ok``; ``error`` only when not. Use the
    ``success`` / ``failure`` constructors rather than building one by hand.
    """

    model_id: str
    model_display_name: str
    ok: bool
    content: str | None = None
    error: str | None = None
    duration_ms: int = 0

    @classmethod
    def success(cls, model_id: str, display_name: str, content: str, duration_ms: int) -> ModelReviewResult:
        return cls(model_id, display_name, ok=True, content=content, duration_ms=duration_ms)

    @classmethod
    def failure(cls, model_id: str, display_name: str, error: str, duration_ms: int = 0) -> ModelReviewResult:
        return cls(model_id, display_name, ok=False, error=error or "Unknown error", duration_ms=duration_ms)


class ReviewStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    TOTAL_FAILURE = "total_failure"
    SETUP_FAILURE = "setup_failure"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    ReviewStatus.SUCCESS: 0,
    ReviewStatus.TOTAL_FAILURE: 1,
    ReviewStatus.SETUP_FAILURE: 1,
    ReviewStatus.PARTIAL_FAILURE: 2,
}
