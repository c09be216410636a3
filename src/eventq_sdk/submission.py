"""Submission of event batches to the ingestion endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .config import ClientConfig

logger = logging.getLogger(__name__)

EVENTS_PATH = "/api/v2/events"


@dataclass(frozen=True)
class SubmissionResponse:
    """Outcome of a batch submission, keyed off the HTTP status code.

    A status code of 0 means the request never got a response.
    """

    status_code: int
    message: str = ""

    @property
    def success(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def bad_request(self) -> bool:
        return self.status_code == 400

    @property
    def unable_to_authenticate(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def payment_required(self) -> bool:
        return self.status_code == 402

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    @property
    def request_entity_too_large(self) -> bool:
        return self.status_code == 413

    @property
    def service_unavailable(self) -> bool:
        return self.status_code in (429, 503)


class SubmissionClient:
    async def submit(
        self, events: List[Dict[str, Any]], config: ClientConfig
    ) -> SubmissionResponse:  # pragma: no cover - interface
        raise NotImplementedError

    async def close(self) -> None:  # pragma: no cover - optional override
        return None


class HttpSubmissionClient(SubmissionClient):
    def __init__(self, config: ClientConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        if not config.server_url:
            raise ValueError("server_url must be configured for HttpSubmissionClient")
        self._client = httpx.AsyncClient(base_url=config.server_url, timeout=config.timeout, transport=transport)

    def _headers(self, config: ClientConfig) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {config.api_key}",
            "User-Agent": config.user_agent,
            "Content-Type": "application/json",
        }
        headers.update(config.headers)
        return headers

    async def submit(self, events: List[Dict[str, Any]], config: ClientConfig) -> SubmissionResponse:
        try:
            response = await self._client.post(EVENTS_PATH, json=events, headers=self._headers(config))
        except httpx.TransportError as exc:
            logger.warning("Event submission to %s failed: %s", config.server_url, exc)
            return SubmissionResponse(status_code=0, message=str(exc) or exc.__class__.__name__)

        message = "" if response.is_success else (response.text or response.reason_phrase)
        return SubmissionResponse(status_code=response.status_code, message=message)

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["SubmissionResponse", "SubmissionClient", "HttpSubmissionClient", "EVENTS_PATH"]
