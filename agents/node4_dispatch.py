"""
DOCFLOW - Summary Dispatch
Forward a finished summary to an address through the form relay.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from core.config import Settings, get_settings
from schemas.pipeline_schemas import DispatchStatus

logger = logging.getLogger(__name__)


class DispatchClient:
    """Relay client. Never raises: every failure becomes DispatchStatus.ERROR."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None) -> None:
        self._settings = settings or get_settings()
        self._client = client

    def relay_url(self, recipient: str) -> str:
        return self._settings.dispatch_relay_url + quote(recipient, safe="")

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=None)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(self, recipient: str, message: str) -> DispatchStatus:
        client = await self._get_client()
        try:
            response = await client.post(self.relay_url(recipient), json={"message": message})
        except httpx.HTTPError as e:
            logger.warning("[Dispatch] transport error for %s: %s", recipient, e)
            return DispatchStatus.ERROR

        if not response.is_success:
            logger.warning("[Dispatch] relay answered HTTP %s for %s", response.status_code, recipient)
            return DispatchStatus.ERROR

        logger.info("[Dispatch] summary sent to %s", recipient)
        return DispatchStatus.SENT
