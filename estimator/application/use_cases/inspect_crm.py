from __future__ import annotations

import logging
from typing import Any

from estimator.application.ports.crm import CrmPort


ESTIMATOR_FIELD_KEYS = (
    "contact.selected_services",
    "contact.business_scale",
    "contact.service_level",
    "contact.estimated_investment",
    "contact.bundle_discount",
    "contact.final_quote_total",
    "contact.project_description",
    "contact.video_walkthrough",
    "contact.full_quote_json",
    "contact.industry_type",
    "contact.estimate_range",
    "contact.estimate_min",
    "contact.estimate_max",
)

ESTIMATE_RANGE_KEYS = ("estimate_min", "estimate_max", "estimate_range")


def _field_key(field: dict[str, Any]) -> str:
    return field.get("fieldKey") or field.get("key") or ""


def _describe(field: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": field.get("id") or field.get("_id"),
        "name": field.get("name"),
        "key": _field_key(field),
        "type": field.get("type"),
        "options": field.get("options") or field.get("values") or None,
    }


class InspectCrmUseCase:
    """Read-only checks that the CRM location is reachable and has the estimator's custom fields."""

    def __init__(self, crm: CrmPort, location_id: str | None = None) -> None:
        self._crm = crm
        self._location_id = location_id
        self._logger = logging.getLogger(__name__)

    def health(self) -> dict[str, Any]:
        fields = self._crm.list_custom_fields()
        sample = _describe(fields[0]) if fields else None
        return {
            "ok": True,
            "locationId": self._location_id,
            "customFieldsCount": len(fields),
            "sampleField": (
                {"id": sample["id"], "name": sample["name"], "key": sample["key"]} if sample else None
            ),
        }

    def estimator_fields(self) -> dict[str, Any]:
        matches = [_describe(f) for f in self._crm.list_custom_fields() if _field_key(f) in ESTIMATOR_FIELD_KEYS]
        return {"ok": True, "found": len(matches), "matches": matches}

    def estimate_range_fields(self) -> dict[str, Any]:
        """Match by normalized key so "contact.estimate_min" and "estimate_min" both count."""
        matches: list[dict[str, Any]] = []
        for field in self._crm.list_custom_fields():
            described = _describe(field)
            key = described["key"]
            normalized = key[len("contact."):] if key.startswith("contact.") else key
            if normalized in ESTIMATE_RANGE_KEYS:
                described["normalizedKey"] = normalized
                matches.append(described)

        found_keys = {m["normalizedKey"] for m in matches}
        missing = [k for k in ESTIMATE_RANGE_KEYS if k not in found_keys]
        if missing:
            self._logger.warning("Estimate range fields missing", extra={"reason": ",".join(missing)})
        return {"ok": True, "found": len(matches), "matches": matches, "missing": missing}

    def pipelines(self) -> dict[str, Any]:
        return {"ok": True, "pipelines": self._crm.list_pipelines()}
