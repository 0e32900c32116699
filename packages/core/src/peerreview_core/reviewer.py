"""Core peer review orchestration."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from peerreview_core.config import MAX_CONTEXT_TOKENS, estimate_tokens, require_api_key
from peerreview_core.job import build_review_job
from peerreview_core.locator import locate
from peerreview_core.models import ModelReviewResult, ReviewJob, ReviewStatus
from peerreview_core.providers.base import BaseReviewer
from peerreview_core.providers.litellm import LiteLLMReviewer
from peerreview_core.registry import get_review_type, model_display_name

console = Console()
logger = logging.getLogger(__name__)

_RULE_WIDTH = 70

# Warn about the whole document earlier than the per-prompt check does, since
# the prompt template adds its own overhead on top.
_CONTENT_WARNING_RATIO = 0.8


@dataclass
class ReviewSummary:
    """Result returned by run_review: everything the CLI needs to pick an exit code."""

    job: ReviewJob
    results: list[ModelReviewResult] = field(default_factory=list)
    status: ReviewStatus = ReviewStatus.SUCCESS
    elapsed_seconds: float = 0.0

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def exit_code(self) -> int:
        return self.status.exit_code


def _get_reviewer(config: dict) -> BaseReviewer:
    return LiteLLMReviewer(
        api_key=require_api_key(config),
        base_url=config["base_url"],
        timeout_seconds=config.get("timeout_seconds", 300),
        max_tokens=config.get("max_tokens", LiteLLMReviewer.MAX_TOKENS),
    )


def determine_status(results: list[ModelReviewResult]) -> ReviewStatus:
    """Map per-model outcomes to the aggregate run status.

    An empty result list counts as total failure: nothing was reviewed.
    """
    failures = sum(1 for r in results if not r.ok)
    if failures == len(results):
        return ReviewStatus.TOTAL_FAILURE
    if failures:
        return ReviewStatus.PARTIAL_FAILURE
    return ReviewStatus.SUCCESS


def print_header(job: ReviewJob, is_explicit: bool, model_names: list[str]) -> None:
    console.print(f"\n{'═' * _RULE_WIDTH}")
    console.print(f"   [bold]AI PEER REVIEW - {job.review_type.upper()} Analysis[/bold]")
    console.print(f"{'═' * _RULE_WIDTH}\n")
    console.print(f"Document: {escape(job.display_name)}", soft_wrap=True)
    console.print(f"Review Type: {job.review_type} ({'explicit' if is_explicit else 'auto-detected'})")
    console.print(f"Models: {' → '.join(model_names)}")
    console.print(f"\n[cyan]Starting parallel peer review across {len(model_names)} AI models...[/cyan]\n")


def print_model_result(result: ModelReviewResult) -> None:
    console.print(f"\n{'─' * _RULE_WIDTH}")
    console.print(f"[bold]{escape(result.model_display_name)}[/bold]  [dim]({result.duration_ms / 1000:.1f}s)[/dim]")
    console.print(f"{'─' * _RULE_WIDTH}\n")
    if result.ok:
        console.print(result.content or "(No content returned)", markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(f"[red]✗ {escape(result.error or 'Unknown error')}[/red]", soft_wrap=True)


def print_footer(review_type: str, summary: ReviewSummary) -> None:
    total = len(summary.results)
    failures = summary.failure_count
    elapsed = f"{summary.elapsed_seconds:.1f}s"
    console.print(f"\n{'═' * _RULE_WIDTH}")
    if summary.status is ReviewStatus.TOTAL_FAILURE:
        console.print(f"[red]All {total} reviews failed! ({elapsed})[/red]")
    elif summary.status is ReviewStatus.PARTIAL_FAILURE:
        console.print(
            f"[yellow]{review_type.upper()} peer review complete with {failures} failure(s)! ({elapsed})[/yellow]"
        )
    else:
        console.print(f"[green]{review_type.upper()} peer review complete! ({elapsed})[/green]")
    console.print(f"{'═' * _RULE_WIDTH}\n")


def run_review(
    config: dict,
    *,
    file_path: str | None = None,
    review_type: str | None = None,
    mode: str | None = None,
    reviewer: BaseReviewer | None = None,
) -> ReviewSummary:
    """Run the full peer review pipeline and return a ReviewSummary.

    Config, IO and Validation problems raise ReviewError before any model is
    contacted. Once dispatch starts nothing raises: per-model failures are
    carried in the summary's results and reflected in its status.
    """
    if reviewer is None:
        reviewer = _get_reviewer(config)

    files = locate(file_path, mode, plans_dir=config["plans_dir"])
    job = build_review_job(files, review_type)

    model_ids = list(get_review_type(job.review_type).models)
    model_names = [model_display_name(m) for m in model_ids]

    tokens = estimate_tokens(job.combined_content)
    if tokens > MAX_CONTEXT_TOKENS * _CONTENT_WARNING_RATIO:
        logger.warning("Content is ~%d tokens - may approach context limits for some models", tokens)

    print_header(job, is_explicit=review_type is not None, model_names=model_names)

    start = time.monotonic()
    results = asyncio.run(reviewer.review_with_models(model_ids, job.combined_content, job.review_type))
    elapsed = time.monotonic() - start

    for result in results:
        print_model_result(result)

    summary = ReviewSummary(
        job=job,
        results=results,
        status=determine_status(results),
        elapsed_seconds=elapsed,
    )
    print_footer(job.review_type, summary)
    return summary
