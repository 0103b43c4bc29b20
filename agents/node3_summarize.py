"""
DOCFLOW - Summarization
Send extracted text to the Hugging Face inference endpoint for its language.
"""

import logging
from typing import Any, Optional

import httpx

from core.config import Settings, get_settings
from core.exceptions import SummarizationError, UnexpectedResponseShape
from schemas.pipeline_schemas import Language, SummaryResult

logger = logging.getLogger(__name__)

# Hard cap on characters submitted to the endpoint.
MAX_INPUT_CHARS = 2000

FAILURE_PREFIX = "Summarization failed: "


def truncate_input(text: str) -> str:
    return (text or "")[:MAX_INPUT_CHARS]


def parse_summary(payload: Any) -> str:
    """Take ``summary_text`` from the first object of a list response."""
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        summary = payload[0].get("summary_text")
        if isinstance(summary, str) and summary:
            return summary
    raise UnexpectedResponseShape()


def failure_marker(error: Exception) -> str:
    return f"{FAILURE_PREFIX}{error}"


class SummarizationClient:
    """Client for the English and Arabic summarization models."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None) -> None:
        self._settings = settings or get_settings()
        self._client = client

    def endpoint_for(self, language: Language) -> str:
        if language is Language.ARABIC:
            return self._settings.summarization_url_ar
        return self._settings.summarization_url_en

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # No timeout: a hung endpoint hangs the run; callers wrap their own.
            self._client = httpx.AsyncClient(timeout=None)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def summarize(self, text: str, language: Language) -> SummaryResult:
        url = self.endpoint_for(language)
        client = await self._get_client()
        logger.info("[Summarize] POST %s (%s)", url, language.value)

        try:
            response = await client.post(
                url,
                json={"inputs": truncate_input(text)},
                headers={"Authorization": f"Bearer {self._settings.hf_token}"},
            )
        except httpx.HTTPError as e:
            raise SummarizationError(f"Failed to summarize text: {e}") from e

        if not response.is_success:
            raise SummarizationError(f"Failed to summarize text (HTTP {response.status_code})")

        try:
            payload = response.json()
        except ValueError as e:
            raise UnexpectedResponseShape() from e

        summary = parse_summary(payload)
        logger.info("[Summarize] received %d characters", len(summary))
        return SummaryResult(summary_text=summary, model_label=language.model_label)
