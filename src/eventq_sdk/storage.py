"""Local persistence for queued events."""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Tuple
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)


class Storage:
    """Ordered key/value store for queued events.

    ``get`` is a dequeue: returned events are removed from the store.
    """

    def save(self, key: str, event: Dict[str, Any]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def get(self, path: str, max_count: int) -> List[Dict[str, Any]]:  # pragma: no cover - interface
        raise NotImplementedError

    def clear(self, path: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class InMemoryStorage(Storage):
    """Process-local store; events are lost on restart."""

    def __init__(self) -> None:
        self._items: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def save(self, key: str, event: Dict[str, Any]) -> None:
        with self._lock:
            self._items[key] = event

    def get(self, path: str, max_count: int) -> List[Dict[str, Any]]:
        with self._lock:
            keys = [key for key in self._items if key.startswith(path)][:max_count]
            return [self._items.pop(key) for key in keys]

    def clear(self, path: str) -> None:
        with self._lock:
            for key in [key for key in self._items if key.startswith(path)]:
                del self._items[key]

    def __len__(self) -> int:
        return len(self._items)


class FileStorage(Storage):
    """Stores each event as a JSON file so the queue survives restarts.

    File names are ``<write time in ns>-<percent-encoded key>.json`` so a
    directory listing sorts in insertion order.
    """

    suffix = ".json"

    def __init__(self, directory: str) -> None:
        if not directory:
            raise ValueError("FileStorage requires a directory")
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._last_stamp = 0

    def _entries(self, path: str) -> List[Tuple[str, Path]]:
        entries = []
        for entry in sorted(self._dir.glob("*" + self.suffix)):
            _, _, encoded = entry.name[: -len(self.suffix)].partition("-")
            key = unquote(encoded)
            if key.startswith(path):
                entries.append((key, entry))
        return entries

    def save(self, key: str, event: Dict[str, Any]) -> None:
        payload = json.dumps(event, separators=(",", ":"))
        with self._lock:
            self._last_stamp = max(time.time_ns(), self._last_stamp + 1)
            target = self._dir / f"{self._last_stamp:020d}-{quote(key, safe='')}{self.suffix}"
            tmp = target.with_name(target.name + ".tmp")
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, target)

    def get(self, path: str, max_count: int) -> List[Dict[str, Any]]:
        events: List[Dict[str, Any]] = []
        with self._lock:
            for key, file_path in self._entries(path):
                if len(events) >= max_count:
                    break
                try:
                    events.append(json.loads(file_path.read_text(encoding="utf-8")))
                except (OSError, json.JSONDecodeError) as exc:
                    logger.warning("Dropping unreadable queue entry %s: %s", key, exc)
                file_path.unlink(missing_ok=True)
        return events

    def clear(self, path: str) -> None:
        with self._lock:
            for _, file_path in self._entries(path):
                file_path.unlink(missing_ok=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries(""))


__all__ = ["Storage", "InMemoryStorage", "FileStorage"]
