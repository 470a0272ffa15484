from __future__ import annotations

import copy
import threading
import uuid
from typing import Any

from estimator.application.ports.submission_outbox import SubmissionOutboxPort


class MemorySubmissionOutbox(SubmissionOutboxPort):
    def __init__(self, limit: int = 10) -> None:
        self._entries: list[dict[str, Any]] = []
        self._limit = limit
        self._lock = threading.Lock()

    def save(self, payload: dict[str, Any], timestamp: float) -> str:
        entry_id = uuid.uuid4().hex
        with self._lock:
            self._entries.append(
                {"id": entry_id, "payload": copy.deepcopy(payload), "timestamp": timestamp, "retry_count": 0}
            )
            self._entries = self._entries[-self._limit :]
        return entry_id

    def list_pending(self) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._entries)

    def settle(self, succeeded_ids: list[str], failed_ids: list[str]) -> None:
        done, failed = set(succeeded_ids), set(failed_ids)
        with self._lock:
            remaining = []
            for entry in self._entries:
                if entry["id"] in done:
                    continue
                if entry["id"] in failed:
                    entry["retry_count"] += 1
                remaining.append(entry)
            self._entries = remaining
