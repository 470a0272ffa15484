from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CrmPort(ABC):
    @abstractmethod
    def upsert_contact(self, payload: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Create or update a contact keyed by email/phone. Returns (contact_id, response body)."""
        raise NotImplementedError

    @abstractmethod
    def create_opportunity(
        self,
        contact_id: str,
        pipeline_id: str,
        stage_id: str,
        name: str,
        monetary_value: float | None = None,
    ) -> dict[str, Any]:
        """Create a pipeline opportunity for a contact. Returns the response body."""
        raise NotImplementedError

    @abstractmethod
    def list_custom_fields(self) -> list[dict[str, Any]]:
        """Custom field definitions of the configured location."""
        raise NotImplementedError

    @abstractmethod
    def list_pipelines(self) -> dict[str, Any]:
        raise NotImplementedError
