from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from enem_api.domain.errors import OverrideUnavailableError
from enem_api.infra.ports.overrides import OverrideSourcePort

logger = logging.getLogger(__name__)


def _published_question(body: Any) -> dict[str, Any] | None:
    # Expected shape: {"success": true, "question": {...}}
    if not isinstance(body, dict) or body.get("success") is not True:
        return None
    question = body.get("question")
    if not isinstance(question, dict):
        return None
    return question


class RemoteOverrideSource(OverrideSourcePort):
    """Reads admin-published corrections from the admin service."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = max(0.1, float(timeout_seconds))
        self._transport = transport

    def build_url(self, year: int, question_id: str) -> str:
        return f"{self.base_url}/api/questions/{int(year)}/{quote(question_id, safe='')}/published"

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
            return await client.get(url, headers={"Accept": "application/json"})

    async def fetch_published(self, year: int, question_id: str) -> dict[str, Any] | None:
        url = self.build_url(year, question_id)
        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise OverrideUnavailableError(f"Timed out after {self.timeout_seconds}s: {url}") from exc
        except httpx.HTTPError as exc:
            raise OverrideUnavailableError(f"Request failed for {url}: {exc}") from exc

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise OverrideUnavailableError(f"Unexpected status {response.status_code} from {url}")

        try:
            body = response.json()
        except ValueError as exc:
            raise OverrideUnavailableError(f"Malformed JSON from {url}") from exc

        question = _published_question(body)
        if question is None:
            logger.debug("No published override for %s/%s", year, question_id)
        return question
