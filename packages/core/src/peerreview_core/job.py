"""Turn discovered files into the single document every model reviews."""

from __future__ import annotations

from peerreview_core.classifier import classify
from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.models import ReviewFile, ReviewJob
from peerreview_core.registry import REVIEW_TYPE_MODELS, review_types

FILE_SEPARATOR = "\n\n---\n\n"


def combine_files(files: list[ReviewFile]) -> str:
    if len(files) == 1:
        return files[0].content
    return FILE_SEPARATOR.join(f"## File: {f.display_name}\n\n```{f.language}\n{f.content}\n```" for f in files)


def build_review_job(files: list[ReviewFile], explicit_type: str | None = None) -> ReviewJob:
    """Assemble a ReviewJob, classifying the content unless a type was given.

    An explicit type skips classification but is still checked against the
    registry here, before anything is dispatched.
    """
    if not files:
        raise ReviewError(ErrorKind.VALIDATION, "No files to review")

    display_name = files[0].display_name if len(files) == 1 else f"{len(files)} files"
    combined = combine_files(files)

    review_type = explicit_type.strip().lower() if explicit_type else classify(combined)
    if review_type not in REVIEW_TYPE_MODELS:
        raise ReviewError(
            ErrorKind.VALIDATION,
            f"Unknown review type: {review_type}. Valid types: {', '.join(review_types())}",
        )

    return ReviewJob(
        files=list(files),
        review_type=review_type,
        display_name=display_name,
        combined_content=combined,
    )
