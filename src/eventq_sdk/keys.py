"""Queue key helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

QUEUE_PATH = "ex-q"


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_queue_key(path: str = QUEUE_PATH, now: Optional[datetime] = None) -> str:
    """Build a storage key unique per call: path, timestamp and a random suffix.

    Keys from the same path sort by creation time.
    """
    moment = now or datetime.now(timezone.utc)
    return f"{path}-{format_timestamp(moment)}-{uuid4().hex[:12]}"


__all__ = ["QUEUE_PATH", "build_queue_key", "format_timestamp"]
