"""Configuration objects for the eventq Python SDK."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

DEFAULT_SERVER_URL = "https://collector.eventq.io"


@dataclass
class ClientConfig:
    """Client settings shared by the queue and the submission client.

    Not frozen: ``submission_batch_size`` is shrunk at runtime when the
    server rejects a batch as too large.
    """

    api_key: Optional[str] = None
    server_url: str = DEFAULT_SERVER_URL
    enabled: bool = True
    submission_batch_size: int = 50
    processing_interval: float = 10.0
    timeout: float = 10.0
    user_agent: str = "eventq-sdk-python/0.1.0"
    headers: Dict[str, str] = field(default_factory=dict)
    storage_path: Optional[str] = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger("eventq_sdk"))

    def __post_init__(self) -> None:
        if self.submission_batch_size < 1:
            raise ValueError("submission_batch_size must be at least 1")
        if self.processing_interval <= 0:
            raise ValueError("processing_interval must be positive")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            api_key=os.environ.get("EVENTQ_API_KEY"),
            server_url=os.environ.get("EVENTQ_SERVER_URL", DEFAULT_SERVER_URL),
            enabled=os.environ.get("EVENTQ_ENABLED", "true").lower() == "true",
            submission_batch_size=int(os.environ.get("EVENTQ_BATCH_SIZE", "50")),
            processing_interval=float(os.environ.get("EVENTQ_PROCESSING_INTERVAL", "10")),
            timeout=float(os.environ.get("EVENTQ_TIMEOUT", "10")),
            storage_path=os.environ.get("EVENTQ_STORAGE_PATH") or None,
        )


__all__ = ["ClientConfig", "DEFAULT_SERVER_URL"]
