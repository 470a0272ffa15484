from __future__ import annotations

import logging
from typing import Any

from estimator.application.ports.crm import CrmPort


class MockCrm(CrmPort):
    def __init__(self, custom_fields: list[dict[str, Any]] | None = None) -> None:
        self._contacts: dict[str, dict[str, Any]] = {}
        self._opportunities: list[dict[str, Any]] = []
        self._custom_fields = list(custom_fields or [])
        self._logger = logging.getLogger(__name__)

    @property
    def contacts(self) -> dict[str, dict[str, Any]]:
        return self._contacts

    @property
    def opportunities(self) -> list[dict[str, Any]]:
        return self._opportunities

    def upsert_contact(self, payload: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        key = (payload.get("email") or payload.get("phone") or "").lower()
        existing = next((cid for cid, c in self._contacts.items() if c["key"] == key), None)
        contact_id = existing or f"mock_contact_{len(self._contacts) + 1}"
        self._contacts[contact_id] = {"key": key, "payload": payload}
        self._logger.info("Mock contact upserted", extra={"contact_id": contact_id})
        return contact_id, {"contact": {"id": contact_id}, "new": existing is None}

    def create_opportunity(
        self,
        contact_id: str,
        pipeline_id: str,
        stage_id: str,
        name: str,
        monetary_value: float | None = None,
    ) -> dict[str, Any]:
        opportunity = {
            "id": f"mock_opportunity_{len(self._opportunities) + 1}",
            "contactId": contact_id,
            "pipelineId": pipeline_id,
            "pipelineStageId": stage_id,
            "name": name,
            "monetaryValue": monetary_value,
        }
        self._opportunities.append(opportunity)
        self._logger.info("Mock opportunity created", extra={"contact_id": contact_id})
        return {"opportunity": opportunity}

    def list_custom_fields(self) -> list[dict[str, Any]]:
        return list(self._custom_fields)

    def list_pipelines(self) -> dict[str, Any]:
        return {"pipelines": []}
