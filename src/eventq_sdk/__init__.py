"""eventq Python SDK."""

from .client import EventClient
from .config import ClientConfig
from .queue import EventQueue
from .storage import FileStorage, InMemoryStorage, Storage
from .submission import HttpSubmissionClient, SubmissionClient, SubmissionResponse

__all__ = [
    "EventClient",
    "ClientConfig",
    "EventQueue",
    "Storage",
    "InMemoryStorage",
    "FileStorage",
    "SubmissionClient",
    "HttpSubmissionClient",
    "SubmissionResponse",
]
