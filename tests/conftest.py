from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import pytest

from eventq_sdk.config import ClientConfig
from eventq_sdk.queue import EventQueue
from eventq_sdk.storage import InMemoryStorage
from eventq_sdk.submission import SubmissionClient, SubmissionResponse
from eventq_sdk.suspension import SuspensionWindow

API_KEY = "LhhP1C9gijpSKCslHHCvwdSIz298twx271nTest"


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class RecordingStorage(InMemoryStorage):
    def __init__(self) -> None:
        super().__init__()
        self.saved_keys: List[str] = []
        self.get_calls = 0
        self.clear_calls = 0

    def save(self, key: str, event: Dict[str, Any]) -> None:
        self.saved_keys.append(key)
        super().save(key, event)

    def get(self, path: str, max_count: int) -> List[Dict[str, Any]]:
        self.get_calls += 1
        return super().get(path, max_count)

    def clear(self, path: str) -> None:
        self.clear_calls += 1
        super().clear(path)


class FakeSubmissionClient(SubmissionClient):
    def __init__(self, status_code: int = 202) -> None:
        self.status_code = status_code
        self.batches: List[List[Dict[str, Any]]] = []

    async def submit(self, events: List[Dict[str, Any]], config: ClientConfig) -> SubmissionResponse:
        self.batches.append(list(events))
        return SubmissionResponse(status_code=self.status_code, message=f"status {self.status_code}")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(api_key=API_KEY, server_url="https://collector.example.com", submission_batch_size=10)


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def submission() -> FakeSubmissionClient:
    return FakeSubmissionClient()


@pytest.fixture()
def queue(config, storage, submission, clock) -> EventQueue:
    return EventQueue(config, storage, submission, window=SuspensionWindow(clock=clock))
