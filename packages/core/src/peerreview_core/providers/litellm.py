from __future__ import annotations

import openai
from openai import AsyncOpenAI

from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.providers.base import DEFAULT_TIMEOUT_SECONDS, BaseReviewer


class LiteLLMReviewer(BaseReviewer):
    """Reviewer backed by a LiteLLM proxy's OpenAI-compatible endpoint.

    Model ids are passed straight through; the proxy decides which upstream
    provider serves each one. The HTTP client is closed after every fan-out
    and reopened on the next call, so one instance can run several reviews.
    """

    MAX_TOKENS = 4096

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_tokens: int = MAX_TOKENS,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens
        self.client: AsyncOpenAI | None = self._make_client()

    def _make_client(self) -> AsyncOpenAI:
        # max_retries=0: exactly one backend call per model. The SDK timeout
        # mirrors the per-call deadline enforced by review_with_model.
        return AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            max_retries=0,
        )

    async def _call_api(self, model_id: str, prompt: str) -> str:
        if self.client is None:
            self.client = self._make_client()
        try:
            response = await self.client.chat.completions.create(
                model=model_id,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
            )
        except openai.APITimeoutError as e:
            raise ReviewError(
                ErrorKind.TIMEOUT, f"Request timed out after {self.timeout_seconds:g} seconds"
            ) from e
        except openai.APIStatusError as e:
            raise ReviewError(ErrorKind.API, f"HTTP {e.status_code}: {_error_body(e)}") from e
        except openai.APIConnectionError as e:
            raise ReviewError(ErrorKind.NETWORK, f"Connection to {self.base_url} failed: {e}") from e

        error = getattr(response, "error", None)
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ReviewError(ErrorKind.API, message or "Unknown API error")
        if not response.choices:
            raise ReviewError(ErrorKind.API, "Response contained no choices")
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        client, self.client = self.client, None
        if client is not None:
            await client.close()


def _error_body(error: openai.APIStatusError) -> str:
    try:
        body = error.response.text
    except Exception:
        body = ""
    return body or error.message
