from __future__ import annotations

import logging
from typing import Any

import httpx

from estimator.application.exceptions import (
    CrmConfigurationError,
    CrmContractError,
    CrmTransportError,
    CrmUpstreamError,
)
from estimator.application.ports.crm import CrmPort
from estimator.core.config import settings


def _parse_body(response: httpx.Response) -> Any:
    text = response.text
    if not text:
        return None
    try:
        return response.json()
    except ValueError:
        return {"raw": text}


def _extract_contact_id(body: Any) -> str | None:
    """Upsert responses nest the contact differently depending on the API path."""
    if not isinstance(body, dict):
        return None
    contact = body.get("contact") or {}
    contact_id = contact.get("id") or contact.get("_id") or body.get("id") or body.get("_id")
    return str(contact_id) if contact_id else None


class GHLClient(CrmPort):
    def __init__(
        self,
        access_token: str | None = None,
        location_id: str | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._access_token = access_token or settings.GHL_ACCESS_TOKEN
        self._location_id = location_id or settings.GHL_LOCATION_ID
        self._logger = logging.getLogger(__name__)

        if not self._access_token:
            raise CrmConfigurationError("Missing GHL_ACCESS_TOKEN")
        if not self._location_id:
            raise CrmConfigurationError("Missing GHL_LOCATION_ID")

        self._client = httpx.Client(
            base_url=base_url or settings.GHL_BASE_URL,
            timeout=timeout or settings.GHL_TIMEOUT_SECONDS,
            transport=transport,
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Version": api_version or settings.GHL_API_VERSION,
                "Accept": "application/json",
            },
        )

    @property
    def location_id(self) -> str:
        return self._location_id

    def _request(self, method: str, path: str, context: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            self._logger.warning("GHL transport error", extra={"reason": context, "error": str(e)})
            raise CrmTransportError(f"{context}: {e}") from e

        body = _parse_body(response)
        if response.status_code >= 400:
            self._logger.error(
                "GHL request failed",
                extra={"reason": context, "status": response.status_code, "error": str(body)[:500]},
            )
            raise CrmUpstreamError(f"{context} failed", status=response.status_code, body=body)
        return body

    def upsert_contact(self, payload: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        request_body = {
            "locationId": self._location_id,
            "email": payload.get("email"),
            "phone": payload.get("phone") or "",
            "firstName": payload.get("firstName") or "",
            "lastName": payload.get("lastName") or "",
            "companyName": payload.get("company") or "",
            "tags": payload.get("tags") or [],
            "customField": payload.get("customField") or {},
        }
        body = self._request("POST", "/contacts/upsert", "Contact upsert", json=request_body)

        contact_id = _extract_contact_id(body)
        if not contact_id:
            raise CrmContractError("Upsert succeeded but contactId was not returned")

        self._logger.info("GHL contact upserted", extra={"contact_id": contact_id})
        return contact_id, body or {}

    def create_opportunity(
        self,
        contact_id: str,
        pipeline_id: str,
        stage_id: str,
        name: str,
        monetary_value: float | None = None,
    ) -> dict[str, Any]:
        request_body: dict[str, Any] = {
            "locationId": self._location_id,
            "contactId": contact_id,
            "pipelineId": pipeline_id,
            "pipelineStageId": stage_id,
            "name": name,
            "status": "open",
        }
        if monetary_value is not None:
            request_body["monetaryValue"] = monetary_value

        body = self._request("POST", "/opportunities/", "Opportunity create", json=request_body)
        self._logger.info("GHL opportunity created", extra={"contact_id": contact_id})
        return body or {}

    def list_custom_fields(self) -> list[dict[str, Any]]:
        body = self._request("GET", f"/locations/{self._location_id}/customFields", "List custom fields")
        if not isinstance(body, dict):
            return []
        fields = body.get("customFields") or body.get("fields") or []
        return fields if isinstance(fields, list) else []

    def list_pipelines(self) -> dict[str, Any]:
        body = self._request(
            "GET",
            "/opportunities/pipelines",
            "List pipelines",
            params={"locationId": self._location_id},
        )
        return body or {}
