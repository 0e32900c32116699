"""Base reviewer implementing the Template Method pattern.

Every backend shares the same review algorithm:
    review_with_models() → review_with_model() per model, concurrently
        → build_prompt()
        → _call_api() under a per-call timeout   ← only this differs per backend

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

review_with_model never raises. Timeouts, transport errors and API errors all
become a failed ModelReviewResult so one broken provider cannot hide the
answers of the others.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod

from peerreview_core.config import MAX_CONTEXT_TOKENS, estimate_tokens
from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.models import ModelReviewResult
from peerreview_core.registry import ALL_MODELS, REVIEW_TYPE_MODELS, model_display_name

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 300
MAX_ERROR_CHARS = 500

_OUTPUT_STRUCTURE = """Provide a structured review with:
1. **Summary** - One paragraph overview
2. **Strengths** - What's done well (3-5 points)
3. **Issues Found** - Problems ranked by severity (Critical > High > Medium > Low)
4. **Recommendations** - Specific, actionable improvements
5. **Questions** - Clarifications needed from the author

Be concise but thorough. Prioritize actionable feedback over generic advice."""


def truncate_error(message: str, limit: int = MAX_ERROR_CHARS) -> str:
    if len(message) <= limit:
        return message
    return message[:limit] + "..."


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class BaseReviewer(ABC):
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    async def review_with_models(
        self,
        model_ids: list[str],
        content: str,
        review_type: str,
    ) -> list[ModelReviewResult]:
        """Review ``content`` with every model concurrently.

        Waits for all calls to settle and returns one result per model id in
        the order given, not the order they finished in.
        """
        try:
            outcomes = await asyncio.gather(
                *(self.review_with_model(model_id, content, review_type) for model_id in model_ids),
                return_exceptions=True,
            )
        finally:
            await self.aclose()

        results: list[ModelReviewResult] = []
        for model_id, outcome in zip(model_ids, outcomes):
            if isinstance(outcome, BaseException):
                results.append(
                    ModelReviewResult.failure(
                        model_id,
                        model_display_name(model_id),
                        truncate_error(f"Review task failed: {outcome!r}"),
                    )
                )
            else:
                results.append(outcome)
        return results

    async def review_with_model(self, model_id: str, content: str, review_type: str) -> ModelReviewResult:
        """Run one model's review and capture any failure in the result."""
        model = ALL_MODELS.get(model_id)
        if model is None:
            return ModelReviewResult.failure(model_id, model_id, f"Unknown model: {model_id}")

        start = time.monotonic()
        try:
            prompt = self.build_prompt(model_id, review_type, content)
            tokens = estimate_tokens(prompt)
            if tokens > MAX_CONTEXT_TOKENS:
                logger.warning(
                    "%s prompt is ~%d tokens, may exceed context window",
                    model.display_name,
                    tokens,
                )
            text = await asyncio.wait_for(self._call_api(model_id, prompt), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            return ModelReviewResult.failure(
                model_id,
                model.display_name,
                f"Request timed out after {self.timeout_seconds:g} seconds",
                _elapsed_ms(start),
            )
        except ReviewError as e:
            logger.debug("%s %s error: %s", model_id, e.kind.value, e)
            return ModelReviewResult.failure(model_id, model.display_name, truncate_error(str(e)), _elapsed_ms(start))
        except Exception as e:
            # SDKs raise many unrelated types; anything else is a transport failure.
            logger.debug("%s call failed: %r", model_id, e)
            return ModelReviewResult.failure(
                model_id,
                model.display_name,
                truncate_error(str(e) or e.__class__.__name__),
                _elapsed_ms(start),
            )

        return ModelReviewResult.success(model_id, model.display_name, text or "", _elapsed_ms(start))

    def build_prompt(self, model_id: str, review_type: str, content: str) -> str:
        """Build the review prompt for one model.

        Pure templating: the only per-model input is the description used to
        frame the model's expertise.
        """
        model = ALL_MODELS.get(model_id)
        if model is None:
            raise ReviewError(ErrorKind.CONFIG, f"Unknown model: {model_id}")
        type_config = REVIEW_TYPE_MODELS.get(review_type)
        if type_config is None:
            raise ReviewError(ErrorKind.CONFIG, f"Unknown review type: {review_type}")

        focus_areas = "\n".join(f"- {area}" for area in type_config.focus_areas)
        return f"""You are conducting a {review_type.upper()} peer review. Your expertise: {model.description}

Focus on these specific areas:
{focus_areas}

Document to review:
---
{content}
---

{_OUTPUT_STRUCTURE}"""

    async def aclose(self) -> None:
        """Release backend resources once a fan-out has settled.

        Called at the end of every review_with_models run; the next run must
        be able to reacquire whatever was released.
        """

    # ------------------------------------------------------------------ #
    # Abstract: implement in each backend                                 #
    # ------------------------------------------------------------------ #

    @abstractmethod
    async def _call_api(self, model_id: str, prompt: str) -> str:
        """Make a single API call and return the raw text response.

        Should raise on failure, preferably a ReviewError with a Network,
        Timeout or Api kind. No retries: one call per model per run.
        """
