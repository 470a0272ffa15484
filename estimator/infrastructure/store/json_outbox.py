from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any

from estimator.application.ports.submission_outbox import SubmissionOutboxPort


class JsonSubmissionOutbox(SubmissionOutboxPort):
    def __init__(self, data_dir: str = "./data/outbox", limit: int = 10) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / "failed_submissions.json"
        self._limit = limit
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> list[dict[str, Any]]:
        """Load entries from disk, empty if missing or corrupted."""
        if not self._file_path.exists():
            return []
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.warning("Outbox file unreadable, starting empty", extra={"error": str(e)})
            return []
        entries = data.get("entries") if isinstance(data, dict) else None
        return entries if isinstance(entries, list) else []

    def _save(self, entries: list[dict[str, Any]]) -> None:
        """Save entries atomically, keeping only the most recent ones."""
        temp_path = self._file_path.with_suffix(".json.tmp")
        data = {"version": 1, "entries": entries[-self._limit :]}
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def save(self, payload: dict[str, Any], timestamp: float) -> str:
        entry_id = uuid.uuid4().hex
        with self._lock:
            entries = self._load()
            entries.append({"id": entry_id, "payload": payload, "timestamp": timestamp, "retry_count": 0})
            self._save(entries)
        self._logger.info("Submission saved for retry", extra={"reason": str(self._file_path)})
        return entry_id

    def list_pending(self) -> list[dict[str, Any]]:
        with self._lock:
            entries = self._load()
            # Entries written before ids existed get one so a replay can settle them.
            if any(not entry.get("id") for entry in entries):
                for entry in entries:
                    entry.setdefault("id", uuid.uuid4().hex)
                self._save(entries)
            return entries

    def settle(self, succeeded_ids: list[str], failed_ids: list[str]) -> None:
        done, failed = set(succeeded_ids), set(failed_ids)
        with self._lock:
            remaining = []
            for entry in self._load():
                if entry.get("id") in done:
                    continue
                if entry.get("id") in failed:
                    entry["retry_count"] = int(entry.get("retry_count") or 0) + 1
                remaining.append(entry)
            self._save(remaining)
