"""Python client for the eventq ingestion service."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import ClientConfig
from .models import (
    create_error_event,
    create_feature_usage_event,
    create_log_event,
    create_not_found_event,
)
from .queue import EventQueue
from .storage import FileStorage, InMemoryStorage, Storage
from .submission import HttpSubmissionClient, SubmissionClient


class EventClient:
    def __init__(
        self,
        config: ClientConfig,
        *,
        storage: Optional[Storage] = None,
        submission_client: Optional[SubmissionClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        if storage is None:
            storage = FileStorage(config.storage_path) if config.storage_path else InMemoryStorage()
        self._submission_client = submission_client or HttpSubmissionClient(config, transport=transport)
        self._queue = EventQueue(config, storage, self._submission_client)

    async def __aenter__(self) -> "EventClient":
        self._queue.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def queue(self) -> EventQueue:
        return self._queue

    def submit_event(self, event: Dict[str, Any]) -> None:
        self._queue.enqueue(event)

    def submit_log(
        self, message: str, source: Optional[str] = None, level: Optional[str] = None, **kwargs: Any
    ) -> None:
        self.submit_event(create_log_event(message, source=source, level=level, **kwargs))

    def submit_feature_usage(self, feature: str, **kwargs: Any) -> None:
        self.submit_event(create_feature_usage_event(feature, **kwargs))

    def submit_not_found(self, resource: str, **kwargs: Any) -> None:
        self.submit_event(create_not_found_event(resource, **kwargs))

    def submit_exception(self, exc: BaseException, **kwargs: Any) -> None:
        self.submit_event(create_error_event(exc, **kwargs))

    async def process_queue(self) -> None:
        await self._queue.process()

    async def close(self) -> None:
        await self._queue.stop()
        await self._submission_client.close()


__all__ = ["EventClient"]
