from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from estimator.application.exceptions import CrmContractError, CrmTransportError, CrmUpstreamError
from estimator.application.ports.crm import CrmPort
from estimator.application.ports.submission_outbox import SubmissionOutboxPort
from estimator.application.utils.formatting import format_range
from estimator.application.utils.state_helpers import determine_pipeline_stage, primary_service_level
from estimator.domain.entities.quote import Quote
from estimator.domain.entities.selection_state import StateSnapshot
from estimator.domain.entities.submission import ContactInfo, OpportunityResult, SubmissionResult


T = TypeVar("T")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SUBMISSION_TAGS = ("service-estimator", "quote-request")


def validate_contact(contact: ContactInfo) -> list[str]:
    errors: list[str] = []
    if not contact.email or not EMAIL_RE.match(contact.email):
        errors.append("Valid email is required")
    if not contact.first_name.strip():
        errors.append("First name is required")
    return errors


class SubmitQuoteUseCase:
    """
    Hands a priced quote to the CRM.

    Contact upsert (with tags and custom fields) is required; opportunity
    creation is best effort. Transport failures are retried with exponential
    backoff. A submission that still fails is saved to the outbox and
    reported as ``SubmissionResult(success=False)``; nothing is raised.
    """

    def __init__(
        self,
        crm: CrmPort,
        outbox: SubmissionOutboxPort,
        custom_fields: dict[str, str] | None = None,
        pipeline_id: str | None = None,
        stage_ids: dict[str, str | None] | None = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._crm = crm
        self._outbox = outbox
        self._custom_fields = dict(custom_fields or {})
        self._pipeline_id = pipeline_id
        self._stage_ids = dict(stage_ids or {})
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._sleep = sleep
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def execute(self, contact: ContactInfo, quote: Quote, snapshot: StateSnapshot) -> SubmissionResult:
        errors = validate_contact(contact)
        if errors:
            return SubmissionResult(success=False, error="; ".join(errors))

        payload = self.build_payload(contact, quote, snapshot)
        self._logger.info(
            "Submitting quote",
            extra={"service": ",".join(snapshot.selected_services), "reason": payload["pipelineStage"]},
        )

        result = self._send(payload)
        if not result.success:
            self._outbox.save(payload, self._clock())
            return SubmissionResult(
                success=False,
                error=result.error,
                saved_for_retry=True,
            )
        return result

    def retry_failed_submissions(self) -> int:
        """Replay saved submissions; returns how many went through."""
        succeeded: list[str] = []
        failed: list[str] = []
        for entry in self._outbox.list_pending():
            result = self._send(entry.get("payload") or {})
            if result.success:
                succeeded.append(entry["id"])
            else:
                failed.append(entry["id"])
        self._outbox.settle(succeeded, failed)
        self._logger.info("Outbox replayed", extra={"reason": f"succeeded={len(succeeded)} failed={len(failed)}"})
        return len(succeeded)

    def build_payload(self, contact: ContactInfo, quote: Quote, snapshot: StateSnapshot) -> dict[str, Any]:
        full_quote = {
            "contact": asdict(contact),
            "selectedServices": list(snapshot.selected_services),
            "configurations": {sid: asdict(cfg) for sid, cfg in snapshot.service_configs.items()},
            "quote": quote.to_dict(),
            "state": asdict(snapshot),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        values = {
            "selected_services": ", ".join(snapshot.selected_services),
            "business_scale": snapshot.common_config.scale or "solopreneur",
            "service_level": primary_service_level(snapshot),
            "industry_type": snapshot.common_config.industry or "other",
            "estimated_investment": quote.subtotal,
            "bundle_discount": quote.total_discount,
            "final_quote_total": quote.final_total,
            "project_description": contact.project_description,
            "video_walkthrough": "Yes" if snapshot.preferences.wants_video else "No",
            "estimate_min": quote.final_total_range.min,
            "estimate_max": quote.final_total_range.max,
            "estimate_range": format_range(quote.final_total_range),
            "full_quote_json": json.dumps(full_quote, indent=2, default=str),
        }
        return {
            "email": contact.email,
            "firstName": contact.first_name,
            "lastName": contact.last_name,
            "phone": contact.phone,
            "company": contact.company,
            "customField": {self._custom_fields.get(key, key): value for key, value in values.items()},
            "tags": list(SUBMISSION_TAGS),
            "pipelineStage": determine_pipeline_stage(snapshot),
            "monetaryValue": quote.final_total,
        }

    def _send(self, payload: dict[str, Any]) -> SubmissionResult:
        try:
            contact_id, _ = self._with_retry(lambda: self._crm.upsert_contact(payload), "Contact upsert")
        except (CrmTransportError, CrmUpstreamError, CrmContractError) as e:
            self._logger.error("Quote submission failed", extra={"error": str(e)})
            return SubmissionResult(success=False, error=str(e))

        opportunity = self._create_opportunity(contact_id, payload)
        self._logger.info("Quote submitted", extra={"contact_id": contact_id})
        return SubmissionResult(success=True, contact_id=contact_id, opportunity=opportunity)

    def _create_opportunity(self, contact_id: str, payload: dict[str, Any]) -> OpportunityResult:
        if not self._pipeline_id:
            return OpportunityResult(skipped=True, reason="GHL_PIPELINE_ID not set (contact upsert still succeeded)")

        stage_id = self._stage_ids.get(payload.get("pipelineStage") or "setup") or self._stage_ids.get("setup")
        if not stage_id:
            return OpportunityResult(skipped=True, reason="Missing stage ID env vars (GHL_STAGE_ID_SETUP etc.)")

        name = f"{payload.get('firstName') or ''} {payload.get('lastName') or ''}".strip() or payload.get("email") or ""
        try:
            body = self._with_retry(
                lambda: self._crm.create_opportunity(
                    contact_id=contact_id,
                    pipeline_id=self._pipeline_id,
                    stage_id=stage_id,
                    name=name,
                    monetary_value=payload.get("monetaryValue"),
                ),
                "Opportunity create",
            )
        except CrmUpstreamError as e:
            self._logger.warning("Opportunity not created", extra={"status": e.status, "contact_id": contact_id})
            return OpportunityResult(ok=False, status=e.status, body=e.body if isinstance(e.body, dict) else None)
        except (CrmTransportError, CrmContractError) as e:
            self._logger.warning("Opportunity not created", extra={"error": str(e), "contact_id": contact_id})
            return OpportunityResult(ok=False, reason=str(e))
        return OpportunityResult(ok=True, body=body)

    def _with_retry(self, call: Callable[[], T], context: str) -> T:
        attempt = 0
        while True:
            try:
                return call()
            except CrmTransportError as e:
                if attempt >= self._max_retries:
                    raise
                delay = self._retry_delay * (2**attempt)
                attempt += 1
                self._logger.info(
                    "Retrying CRM request",
                    extra={"reason": context, "attempt": f"{attempt}/{self._max_retries}", "error": str(e)},
                )
                self._sleep(delay)
