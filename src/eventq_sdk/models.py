"""Builders for the event payloads accepted by the queue."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from .keys import format_timestamp
from .suspension import utcnow

ERROR_TYPE = "error"
LOG_TYPE = "log"
USAGE_TYPE = "usage"
NOT_FOUND_TYPE = "404"


def create_event(
    event_type: str,
    *,
    message: Optional[str] = None,
    source: Optional[str] = None,
    reference_id: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    date: Optional[datetime] = None,
) -> Dict[str, Any]:
    if not event_type:
        raise ValueError("event_type is required")
    event: Dict[str, Any] = {"type": event_type, "date": format_timestamp(date or utcnow())}
    if message is not None:
        event["message"] = message
    if source is not None:
        event["source"] = source
    if reference_id:
        event["reference_id"] = reference_id
    if data:
        event["data"] = dict(data)
    return event


def create_log_event(
    message: str, source: Optional[str] = None, level: Optional[str] = None, **kwargs: Any
) -> Dict[str, Any]:
    event = create_event(LOG_TYPE, message=message, source=source, **kwargs)
    if level:
        event.setdefault("data", {})["level"] = level
    return event


def create_feature_usage_event(feature: str, **kwargs: Any) -> Dict[str, Any]:
    return create_event(USAGE_TYPE, source=feature, **kwargs)


def create_not_found_event(resource: str, **kwargs: Any) -> Dict[str, Any]:
    return create_event(NOT_FOUND_TYPE, source=resource, **kwargs)


def create_error_event(exc: BaseException, **kwargs: Any) -> Dict[str, Any]:
    event = create_event(ERROR_TYPE, message=str(exc) or exc.__class__.__name__, **kwargs)
    event.setdefault("data", {})["error_type"] = f"{type(exc).__module__}.{type(exc).__qualname__}"
    return event


__all__ = [
    "ERROR_TYPE",
    "LOG_TYPE",
    "USAGE_TYPE",
    "NOT_FOUND_TYPE",
    "create_event",
    "create_log_event",
    "create_feature_usage_event",
    "create_not_found_event",
    "create_error_event",
]
