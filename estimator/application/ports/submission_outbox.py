from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class SubmissionOutboxPort(ABC):
    """Failed CRM submissions kept for a later replay."""

    @abstractmethod
    def save(self, payload: dict[str, Any], timestamp: float) -> str:
        """Queue a payload; returns the entry id."""
        raise NotImplementedError

    @abstractmethod
    def list_pending(self) -> list[dict[str, Any]]:
        """Entries as {"id", "payload", "timestamp", "retry_count"}, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def settle(self, succeeded_ids: list[str], failed_ids: list[str]) -> None:
        """
        Record a replay against the current contents: drop the succeeded
        entries and bump retry_count on the failed ones. Entries saved while
        the replay was running are left alone.
        """
        raise NotImplementedError
