from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from estimator.api.v1.schemas import (
    EstimateResponseSchema,
    RetryResponseSchema,
    SelectionSchema,
    SubmitQuoteRequestSchema,
    SubmitQuoteResponseSchema,
)
from estimator.application.use_cases.estimator_session import EstimatorState
from estimator.application.use_cases.submit_quote import SubmitQuoteUseCase, validate_contact
from estimator.application.utils.formatting import format_currency, format_range
from estimator.application.utils.timeline import estimate_delivery_date, estimate_timeline
from estimator.domain.entities.submission import ContactInfo
from estimator.wiring.dependencies import get_submit_quote_use_case, new_estimator_state

router = APIRouter()
logger = logging.getLogger(__name__)


def build_state(selection: SelectionSchema) -> EstimatorState:
    """Replay a submitted selection through the estimator state so defaults apply."""
    state = new_estimator_state()
    for service_id in dict.fromkeys(selection.selected_services):
        state.toggle_service(service_id)
        config = selection.service_configs.get(service_id)
        if config:
            partial = config.model_dump(exclude_none=True)
            if partial:
                state.update_service_config(service_id, **partial)
    state.update_common_config(**selection.common_config.model_dump())
    state.update_preferences(**selection.preferences.model_dump())
    return state


@router.post("/estimate", response_model=EstimateResponseSchema)
def estimate(selection: SelectionSchema):
    state = build_state(selection)
    quote = state.quote
    timeline_days = estimate_timeline(state.selected_services, state.primary_service_level)
    return EstimateResponseSchema(
        quote=quote.to_dict(),
        final_total_display=format_currency(quote.final_total),
        final_total_range_display=format_range(quote.final_total_range),
        anchor_range_display=format_range(quote.anchor_range),
        timeline_days=timeline_days,
        estimated_delivery=estimate_delivery_date(timeline_days),
        active_bundles=[b.name for b in state.active_bundles],
    )


@router.post("/submit-quote", response_model=SubmitQuoteResponseSchema)
def submit_quote(
    req: SubmitQuoteRequestSchema,
    uc: SubmitQuoteUseCase = Depends(get_submit_quote_use_case),
):
    contact = ContactInfo.normalize(**req.contact.model_dump())
    errors = validate_contact(contact)
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))

    state = build_state(req.selection)
    if not state.validate_step("services"):
        raise HTTPException(status_code=400, detail="At least one service must be selected")

    quote = state.quote
    result = uc.execute(contact, quote, state.snapshot())
    if not result.success:
        logger.warning("Quote submission failed", extra={"error": result.error})
        raise HTTPException(status_code=502, detail=result.error or "CRM submission failed")

    return SubmitQuoteResponseSchema(
        ok=True,
        contact_id=result.contact_id,
        final_total=quote.final_total,
        opportunity=asdict(result.opportunity) if result.opportunity else None,
    )


@router.post("/submissions/retry", response_model=RetryResponseSchema)
def retry_submissions(uc: SubmitQuoteUseCase = Depends(get_submit_quote_use_case)):
    return RetryResponseSchema(retried=uc.retry_failed_submissions())
